"""
Pytest configuration and global fixtures.

This module provides shared fixtures used across all tests.
"""

from collections.abc import Generator
from pathlib import Path

import pytest

import openiban.defaults
import openiban.utils.config
from openiban.parser import IbanParser
from openiban.registry.countries import CountryDefinition
from openiban.registry.registry import IbanRegistry
from openiban.validation.validator import IbanValidator


@pytest.fixture(scope="session")
def swift_registry() -> IbanRegistry:
    """Registry built from the embedded SWIFT table."""
    return IbanRegistry.swift()


@pytest.fixture
def validator(swift_registry: IbanRegistry) -> IbanValidator:
    return IbanValidator(swift_registry)


@pytest.fixture
def parser(validator: IbanValidator) -> IbanParser:
    return IbanParser(validator)


@pytest.fixture
def variable_registry() -> IbanRegistry:
    """Registry with variable-length segments, for structural edge cases.

    "ZZ" BBAN: 1 to 3 letters followed by exactly 4 digits (total 11).
    """
    return IbanRegistry.from_definitions(
        [CountryDefinition("ZZ", "Testland", 11, "3a4!n", None)]
    )


@pytest.fixture
def registry_file(tmp_path: Path) -> Path:
    """YAML definitions file with two countries."""
    path = tmp_path / "countries.yaml"
    path.write_text(
        "countries:\n"
        "  - code: NL\n"
        "    name: Netherlands\n"
        "    length: 18\n"
        "    pattern: 4!a10!n\n"
        "    example: NL91ABNA0417164300\n"
        "  - code: DE\n"
        "    name: Germany\n"
        "    length: 22\n"
        "    pattern: 8!n10!n\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def clean_defaults(monkeypatch) -> Generator[None, None, None]:
    """Isolate tests from process-wide settings and default bundle."""
    for name in ("OPENIBAN_REGISTRY_FILE", "OPENIBAN_MAX_INPUT_LENGTH"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(openiban.utils.config, "_settings", None)
    monkeypatch.setattr(openiban.defaults, "_defaults", None)
    yield
