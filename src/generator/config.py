"""Configuration dataclasses and loader for the route planner."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class ProbeConfig:
    """The sanity probe sent before any per-route test."""

    route: str = "/sessions"
    method: str = "post"
    expected_status: int = 400


@dataclass
class PlannerConfig:
    """Route priority and status-code rules."""

    identity_routes: list[str] = field(default_factory=lambda: ["/users", "/trainees"])
    session_routes: list[str] = field(default_factory=lambda: ["/sessions"])
    priority_method: str = "post"
    excluded_status_codes: list[str] = field(default_factory=lambda: ["500"])
    duplicate_status_code: str = "409"
    duplicate_warning: str = "No duplicate user check"
    probe: ProbeConfig = field(default_factory=ProbeConfig)


def load_planner_config(path: Path | str | None = None) -> PlannerConfig:
    """Load planner configuration from a YAML file.

    The file may hold the settings at top level or under a ``planner``
    key.  Unknown keys are silently ignored.

    Args:
        path: Path to config YAML.  If ``None`` or the file does not
              exist, returns full defaults.

    Returns:
        Populated configuration dataclass.
    """
    if path is None:
        return PlannerConfig()

    path = Path(path)
    if not path.exists():
        return PlannerConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw: dict[str, Any] = yaml.safe_load(f) or {}
    raw = raw.get("planner", raw)

    def _pick(data: dict[str, Any], cls: type) -> dict[str, Any]:
        """Filter *data* to only keys accepted by *cls*."""
        valid = {f.name for f in cls.__dataclass_fields__.values()}
        return {k: v for k, v in data.items() if k in valid}

    top_level = _pick(raw, PlannerConfig)
    probe_raw = top_level.pop("probe", None) or {}

    cfg = PlannerConfig(
        probe=ProbeConfig(**_pick(probe_raw, ProbeConfig)),
        **top_level,
    )
    # YAML may give bare integers for status codes
    cfg.excluded_status_codes = [str(code) for code in cfg.excluded_status_codes]
    cfg.duplicate_status_code = str(cfg.duplicate_status_code)
    return cfg
