"""End-to-end tests for generate_test_file."""
from __future__ import annotations

import json
import threading
from pathlib import Path

import httpx
import pytest

from src.generator.test_file_generator import GenerationResult, generate_test_file
from src.shared.config import GeneratorSettings


def _scripted_ask(*answers: str):
    """Prompt stub returning *answers* in order and recording the prompts."""
    remaining = list(answers)
    prompts: list[str] = []

    def ask(prompt: str) -> str:
        prompts.append(prompt)
        return remaining.pop(0)

    ask.prompts = prompts
    return ask


@pytest.fixture
def settings() -> GeneratorSettings:
    return GeneratorSettings(log_level="warning")


class TestGenerateFromFile:
    """Generation from a local spec file."""

    @pytest.mark.asyncio
    async def test_writes_module_and_sidecar(self, tmp_path, sample_spec_file, sample_doc, settings):
        out_dir = tmp_path / "out"
        result = await generate_test_file(
            student_name="Alice",
            assignment_id="2",
            spec_file_path=str(sample_spec_file),
            interactive=False,
            output_dir=out_dir,
            settings=settings,
        )

        assert isinstance(result, GenerationResult)
        assert result.test_file == out_dir / "alice.2.py"
        assert result.spec_file == out_dir / "alice.2.json"
        assert result.base_url == "https://api.example.com"
        assert result.case_count == 6
        assert result.warnings == ["No duplicate user check"]

        source = result.test_file.read_text(encoding="utf-8")
        assert "BASE_URL = 'https://api.example.com'" in source
        assert "t('GET /items', False, 200)" in source
        compile(source, str(result.test_file), "exec")

        sidecar = result.spec_file.read_text(encoding="utf-8")
        assert json.loads(sidecar) == sample_doc
        assert sidecar.startswith('{\n  "openapi"')

    @pytest.mark.asyncio
    async def test_output_dir_from_settings(self, tmp_path, sample_spec_file):
        settings = GeneratorSettings(output_dir=str(tmp_path / "from-settings"))
        result = await generate_test_file(
            student_name="bob",
            assignment_id="1",
            spec_file_path=str(sample_spec_file),
            interactive=False,
            settings=settings,
        )
        assert result is not None
        assert result.test_file.parent == tmp_path / "from-settings"

    @pytest.mark.asyncio
    async def test_invalid_spec_file_aborts(self, tmp_path, settings):
        result = await generate_test_file(
            student_name="alice",
            assignment_id="2",
            spec_file_path=str(tmp_path / "missing.json"),
            interactive=False,
            output_dir=tmp_path / "out",
            settings=settings,
        )
        assert result is None
        assert not (tmp_path / "out").exists()

    @pytest.mark.asyncio
    async def test_non_object_document_aborts(self, tmp_path, settings):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        result = await generate_test_file(
            student_name="alice",
            assignment_id="2",
            spec_file_path=str(path),
            interactive=False,
            output_dir=tmp_path / "out",
            settings=settings,
        )
        assert result is None

    @pytest.mark.asyncio
    async def test_non_mapping_paths_aborts(self, tmp_path, settings, capsys):
        path = tmp_path / "listpaths.json"
        doc = {"servers": [{"url": "https://api.example.com"}], "paths": ["/users"]}
        path.write_text(json.dumps(doc), encoding="utf-8")
        result = await generate_test_file(
            student_name="alice",
            assignment_id="2",
            spec_file_path=str(path),
            interactive=False,
            output_dir=tmp_path / "out",
            settings=settings,
        )
        assert result is None
        assert not (tmp_path / "out").exists()
        assert "'paths' must be an object" in capsys.readouterr().out

    @pytest.mark.asyncio
    async def test_missing_base_url_non_interactive_aborts(self, tmp_path, settings):
        path = tmp_path / "noservers.json"
        path.write_text(json.dumps({"openapi": "3.0.0", "paths": {}}), encoding="utf-8")
        result = await generate_test_file(
            student_name="alice",
            assignment_id="2",
            spec_file_path=str(path),
            interactive=False,
            output_dir=tmp_path / "out",
            settings=settings,
        )
        assert result is None


class TestGenerateFromLink:
    """Generation from a Swagger UI link."""

    @pytest.mark.asyncio
    async def test_extracts_doc_from_init_script(self, tmp_path, swagger_init_script, sample_doc, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api-docs/swagger-ui-init.js"
            return httpx.Response(200, text=swagger_init_script)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            result = await generate_test_file(
                student_name="Alice Smith",
                assignment_id="3",
                swagger_ui_link="https://docs.alice.me/api-docs/",
                interactive=False,
                output_dir=tmp_path,
                settings=settings,
                client=client,
            )

        assert result is not None
        assert result.test_file.name == "alice_smith.3.py"
        assert json.loads(result.spec_file.read_text(encoding="utf-8")) == sample_doc
        assert "SWAGGER_URL = 'https://docs.alice.me/api-docs/'" in result.test_file.read_text(
            encoding="utf-8"
        )

    @pytest.mark.asyncio
    async def test_missing_swagger_doc_aborts(self, tmp_path, settings):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="window.ui = SwaggerUIBundle({});")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            result = await generate_test_file(
                student_name="alice",
                assignment_id="2",
                swagger_ui_link="https://docs.alice.me",
                interactive=False,
                output_dir=tmp_path / "out",
                settings=settings,
                client=client,
            )
        assert result is None
        assert not (tmp_path / "out").exists()


class TestInteractivePrompts:
    """Prompting for missing values."""

    @pytest.mark.asyncio
    async def test_prompts_for_identity_and_base_url(self, tmp_path, settings):
        path = tmp_path / "noservers.json"
        path.write_text(json.dumps({"openapi": "3.0.0", "paths": {}}), encoding="utf-8")
        ask = _scripted_ask("Carol", "4", "http://localhost:3000/")

        result = await generate_test_file(
            spec_file_path=str(path),
            output_dir=tmp_path / "out",
            settings=settings,
            ask=ask,
        )

        assert result is not None
        assert result.test_file == Path(tmp_path / "out" / "carol.4.py")
        assert result.base_url == "http://localhost:3000"
        assert len(ask.prompts) == 3

    @pytest.mark.asyncio
    async def test_missing_student_name_non_interactive(self, tmp_path, sample_spec_file, settings):
        result = await generate_test_file(
            assignment_id="2",
            spec_file_path=str(sample_spec_file),
            interactive=False,
            output_dir=tmp_path / "out",
            settings=settings,
        )
        assert result is None
        assert not (tmp_path / "out").exists()

    @pytest.mark.asyncio
    async def test_blank_answers_abort(self, tmp_path, settings):
        ask = _scripted_ask("", "", "")
        result = await generate_test_file(
            output_dir=tmp_path / "out",
            settings=settings,
            ask=ask,
        )
        assert result is None

    @pytest.mark.asyncio
    async def test_prompts_run_off_the_event_loop_thread(self, tmp_path, settings):
        path = tmp_path / "noservers.json"
        path.write_text(json.dumps({"openapi": "3.0.0", "paths": {}}), encoding="utf-8")
        loop_thread = threading.get_ident()
        prompt_threads: list[int] = []
        answers = ["Dana", "5", "http://localhost:4000"]

        def ask(prompt: str) -> str:
            prompt_threads.append(threading.get_ident())
            return answers.pop(0)

        result = await generate_test_file(
            spec_file_path=str(path),
            output_dir=tmp_path / "out",
            settings=settings,
            ask=ask,
        )

        assert result is not None
        assert len(prompt_threads) == 3
        assert loop_thread not in prompt_threads
