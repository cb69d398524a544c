"""
Shared test fixtures and configuration for mamlgen tests.

This module provides common fixtures used across all test types:
- The sample greeting cmdlet module and its companion XML documentation
- Generators with the default and with single-source extractor chains
- A factory writing throwaway cmdlet modules to a temporary directory
"""

import sys
import uuid
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"

# ============================================================================
# SAMPLE MODULE FIXTURES
# ============================================================================


@pytest.fixture
def greeting_module():
    """The sample cmdlet module (tests/fixtures/greeting_module.py)."""
    import greeting_module

    return greeting_module


@pytest.fixture
def fixtures_dir():
    return FIXTURES_DIR


# ============================================================================
# GENERATOR FIXTURES
# ============================================================================


@pytest.fixture
def generator():
    """MamlGenerator with the default extractor chain."""
    from mamlgen.generator import MamlGenerator

    return MamlGenerator()


@pytest.fixture
def reflection_generator():
    """MamlGenerator that only reads declarations."""
    from mamlgen.extractors import ReflectionDocumentationExtractor
    from mamlgen.generator import MamlGenerator

    return MamlGenerator(ReflectionDocumentationExtractor())


# ============================================================================
# TEMPORARY MODULE FIXTURES
# ============================================================================


@pytest.fixture
def make_cmdlet_module(tmp_path, monkeypatch):
    """Factory writing a cmdlet module (and optional companion XML) to tmp_path.

    Returns a function ``make(source, xml=None)`` that writes the files,
    imports the module under a unique name and returns it. The module name
    is available as ``module.__name__`` for building member ids.
    """
    from mamlgen.loader import load_module

    monkeypatch.setattr(sys, "path", list(sys.path))
    created = []

    def make(source: str, xml: str | None = None):
        name = f"cmdlets_{uuid.uuid4().hex[:8]}"
        module_path = tmp_path / f"{name}.py"
        module_path.write_text(source, encoding="utf-8")
        if xml is not None:
            (tmp_path / f"{name}.xml").write_text(xml.replace("{module}", name), encoding="utf-8")
        module = load_module(str(module_path))
        created.append(name)
        return module

    yield make

    for name in created:
        sys.modules.pop(name, None)
