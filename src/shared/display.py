"""Rich-based terminal display layer for generation and test runs.

Provides formatted output for queued case headers, request/response echo,
PASS/FAIL lines, warnings, error panels and run summaries.  Uses a
module-level :class:`~rich.console.Console` singleton for consistent output.
"""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.pretty import Pretty
from rich.text import Text

# ---------------------------------------------------------------------------
# Module-level Console singleton
# ---------------------------------------------------------------------------

_console = Console(highlight=False)

DIVIDER = "-" * 70


# ---------------------------------------------------------------------------
# Queued case output
# ---------------------------------------------------------------------------


def print_case_header(method: str, endpoint: str, body: Any, expected_status: int) -> None:
    """Print the title bar for a queued case about to run."""
    title = Text(f"▸ Testing {method} {endpoint}{_body_suffix(body)} ▸ {expected_status}")
    title.stylize("white on blue")
    _console.print(title)


def print_request(method: str, endpoint: str, body: Any) -> None:
    _console.print(Text(f"     >>> {method} {endpoint}{_body_suffix(body)}"))


def print_response(status: int, body: Any) -> None:
    rendered = body if isinstance(body, str) else json.dumps(body, default=str)
    _console.print(Text(f"     <<< {status} {rendered}"))


def print_pass(url: str, expected_status: int, auth: bool) -> None:
    line = Text(f"PASS  ▸ {_lock(auth)} {url} → {expected_status}", style="black on green")
    _console.print(Text("     ") + line)
    _console.print()


def print_fail(url: str, expected_status: int, actual_status: int, body: Any, auth: bool) -> None:
    body_desc = f" | body: {json.dumps(body, default=str)}" if body is not None else ""
    line = Text(
        f"FAIL  ▸ {_lock(auth)} {url} expected {expected_status}, got {actual_status}{body_desc}",
        style="black on red",
    )
    _console.print(Text("     ") + line)


def print_callback_failure(url: str, error: str) -> None:
    _console.print(Text(f"     FAIL  ▸ {url}: {error}", style="black on red"))


# ---------------------------------------------------------------------------
# Generic messages
# ---------------------------------------------------------------------------


def print_warning(message: str) -> None:
    """Print an advisory line in black on yellow."""
    _console.print(Text(f"WARNING: {message}", style="black on yellow"))


def print_info(message: str) -> None:
    _console.print(Text(message))


def print_error_panel(error: str | Exception) -> None:
    """Print an error inside a red panel."""
    error_text = str(error)
    _console.print(
        Panel(
            Text(error_text, style="bold white"),
            title="[bold red]Error[/bold red]",
            border_style="red",
            expand=False,
        )
    )


def print_expectation(message: str) -> None:
    _console.print(Text(f"✅ {message}"))


def print_state(key: str, value: Any) -> None:
    _console.print(Text(f"💾 {key} = "), Pretty(value, max_depth=2))


# ---------------------------------------------------------------------------
# Named-test runner output
# ---------------------------------------------------------------------------


def print_test_title(description: str) -> None:
    _console.print(Text(f"\n{DIVIDER}\n🧪 {description}"))


def print_test_outcome(outcome: str, message: str = "") -> None:
    if outcome == "pass":
        _console.print(Text("▶️ PASSED", style="green"))
    elif outcome == "skip":
        _console.print(Text(f"⏭️  SKIPPED: {message}", style="yellow"))
    else:
        _console.print(Text(f"❌ FAILED: {message}", style="red"))


def print_run_summary(passed: int, failed: int, skipped: int = 0) -> None:
    total = passed + failed + skipped
    _console.print(
        Text(
            f"\n{DIVIDER}\nPassed: {passed} | Failed: {failed} | "
            f"Skipped: {skipped} | Total: {total}\n{DIVIDER}"
        )
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _lock(auth: bool) -> str:
    return "🔒" if auth else " "


def _body_suffix(body: Any) -> str:
    if not body:
        return ""
    return f" {body if isinstance(body, str) else json.dumps(body, default=str)}"
