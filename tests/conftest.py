"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import os
import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local overridekit package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of overridekit modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("overridekit"):
        del sys.modules[module_name]

from overridekit.semantic.cpp import CppParser  # noqa: E402
from overridekit.semantic.model import SemanticModel  # noqa: E402


@pytest.fixture(scope="session")
def cpp_parser() -> CppParser:
    return CppParser()


@pytest.fixture
def parse(cpp_parser: CppParser):  # type: ignore[no-untyped-def]
    """Parse C++ source into a SemanticModel."""

    def _parse(source: str, path: str = "test.cpp") -> SemanticModel:
        return cpp_parser.parse(source, path=path)

    return _parse


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory) -> None:
    """Keep user-level config and env vars out of tests."""
    from overridekit.config import loader

    monkeypatch.setattr(loader, "GLOBAL_CONFIG_PATH", tmp_path_factory.mktemp("home") / "config.yaml")
    for key in list(os.environ):
        if key.upper().startswith("OVERRIDEKIT__"):
            monkeypatch.delenv(key)
