"""Tests for the openiban CLI - Typer commands with CliRunner."""

import pytest
from typer.testing import CliRunner

from openiban.cli.main import app

pytestmark = pytest.mark.unit

runner = CliRunner()


@pytest.fixture(autouse=True)
def _isolated(clean_defaults):
    yield


class TestValidateCommand:
    def test_valid_values(self):
        result = runner.invoke(
            app, ["validate", "NL91 ABNA 0417 1643 00", "DE89370400440532013000"]
        )

        assert result.exit_code == 0
        assert "NL91ABNA0417164300" in result.output
        assert "DE89370400440532013000" in result.output
        assert "valid" in result.output

    def test_any_invalid_value_fails(self):
        result = runner.invoke(app, ["validate", "NL91ABNA0417164300", "NL92ABNA0417164300"])

        assert result.exit_code == 1
        assert "invalid_checksum" in result.output

    def test_markup_in_input_is_not_interpreted(self):
        result = runner.invoke(app, ["validate", "[bold]NL91[/bold]"])

        assert result.exit_code == 1
        assert "illegal_characters" in result.output
        assert "[bold]NL91[/bold]" in result.output

    def test_requires_a_value(self):
        result = runner.invoke(app, ["validate"])

        assert result.exit_code == 2


class TestFormatCommand:
    def test_partitioned_by_default(self):
        result = runner.invoke(app, ["format", "nl91abna0417164300"])

        assert result.exit_code == 0
        assert result.output.strip() == "NL91 ABNA 0417 1643 00"

    def test_flat(self):
        result = runner.invoke(app, ["format", "NL91 ABNA 0417 1643 00", "--style", "flat"])

        assert result.exit_code == 0
        assert result.output.strip() == "NL91ABNA0417164300"

    def test_invalid_iban(self):
        result = runner.invoke(app, ["format", "NL91ABNA04171643"])

        assert result.exit_code == 1
        assert "Wrong IBAN length" in result.output

    def test_unknown_style(self):
        result = runner.invoke(app, ["format", "NL91ABNA0417164300", "-s", "dotted"])

        assert result.exit_code == 2
        assert "Unknown style" in result.output


class TestCountriesCommands:
    def test_lists_builtin_table(self):
        result = runner.invoke(app, ["countries"])

        assert result.exit_code == 0
        assert "Registered Countries (77)" in result.output
        assert "4!a10!n" in result.output

    def test_country_details(self):
        result = runner.invoke(app, ["country", "nl"])

        assert result.exit_code == 0
        assert "Netherlands" in result.output
        assert "18" in result.output
        assert "NL91ABNA0417164300" in result.output

    def test_unknown_country(self):
        result = runner.invoke(app, ["country", "XX"])

        assert result.exit_code == 1
        assert "XX is not registered" in result.output


class TestCheckDigitsCommand:
    def test_computes_iban(self):
        result = runner.invoke(app, ["check-digits", "NL", "ABNA0417164300"])

        assert result.exit_code == 0
        assert result.output.strip() == "NL91ABNA0417164300"

    def test_lower_case_and_spaces(self):
        result = runner.invoke(app, ["check-digits", "de", "3704 0044 0532 0130 00"])

        assert result.exit_code == 0
        assert result.output.strip() == "DE89370400440532013000"

    def test_bban_not_matching_format(self):
        result = runner.invoke(app, ["check-digits", "NL", "0417164300ABNA"])

        assert result.exit_code == 1
        assert "4!a10!n" in result.output

    def test_unknown_country(self):
        result = runner.invoke(app, ["check-digits", "XX", "1234"])

        assert result.exit_code == 1


class TestGlobalOptions:
    def test_version(self):
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert "1.0.0" in result.output

    def test_custom_registry(self, registry_file):
        result = runner.invoke(app, ["--registry", str(registry_file), "countries"])

        assert result.exit_code == 0
        assert "Registered Countries (2)" in result.output

    def test_custom_registry_limits_validation(self, registry_file):
        result = runner.invoke(
            app, ["--registry", str(registry_file), "validate", "GB29NWBK60161331926819"]
        )

        assert result.exit_code == 1
        assert "country_not_found" in result.output

    def test_registry_from_environment(self, monkeypatch, registry_file):
        monkeypatch.setenv("OPENIBAN_REGISTRY_FILE", str(registry_file))

        result = runner.invoke(app, ["countries"])

        assert "Registered Countries (2)" in result.output

    def test_broken_registry(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text(
            "countries:\n  - {code: NL, name: Netherlands, length: 20, pattern: 4!a10!n}\n",
            encoding="utf-8",
        )

        result = runner.invoke(app, ["--registry", str(path), "countries"])

        assert result.exit_code == 2
        assert "Cannot load country registry" in result.output

    def test_missing_registry_file(self, tmp_path):
        result = runner.invoke(app, ["--registry", str(tmp_path / "missing.yaml"), "countries"])

        assert result.exit_code == 2
