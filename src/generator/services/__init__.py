"""Generation pipeline services: acquire, resolve, plan and emit."""

from src.generator.services.base_url import derive_base_url
from src.generator.services.case_emitter import CaseEmitter, render_test_module
from src.generator.services.route_planner import RoutePlanner
from src.generator.services.script_extractor import extract_swagger_doc
from src.generator.services.spec_loader import acquire_spec

__all__ = [
    "CaseEmitter",
    "RoutePlanner",
    "acquire_spec",
    "derive_base_url",
    "extract_swagger_doc",
    "render_test_module",
]
