"""Tests for structured logging helpers."""

from unittest.mock import Mock

import pytest

from openiban.utils.logging import LogPerformance, add_app_context, mask_iban_text, mask_ibans

pytestmark = pytest.mark.unit


class TestMaskIbanText:
    def test_masks_body(self):
        assert mask_iban_text("NL91ABNA0417164300") == "NL91**********4300"

    def test_masks_inside_text(self):
        masked = mask_iban_text("rejected GB29NWBK60161331926819 and DE89370400440532013000")

        assert masked == "rejected GB29**************6819 and DE89**************3000"

    @pytest.mark.parametrize(
        "text",
        ["iban_validation_failed", "invalid_checksum", "NL91", "Unknown country code: XX"],
    )
    def test_leaves_other_text(self, text):
        assert mask_iban_text(text) == text


class TestProcessors:
    def test_mask_ibans_processor(self):
        event = {
            "event": "iban_rejected NL91ABNA0417164300",
            "value": "NL91ABNA0417164300",
            "country_count": 77,
        }

        result = mask_ibans(None, "info", event)

        assert result["event"] == "iban_rejected NL91**********4300"
        assert result["value"] == "NL91**********4300"
        assert result["country_count"] == 77

    def test_add_app_context(self):
        result = add_app_context(None, "info", {"event": "x"})

        assert result["app"] == "openiban"
        assert result["version"] == "1.0.0"


class TestLogPerformance:
    def test_logs_completion(self):
        logger = Mock()

        with LogPerformance("iban_registry_build", logger):
            pass

        assert logger.debug.call_args_list[-1].args == ("iban_registry_build_completed",)
        logger.error.assert_not_called()

    def test_logs_failure(self):
        logger = Mock()

        with pytest.raises(RuntimeError):
            with LogPerformance("iban_registry_build", logger):
                raise RuntimeError("boom")

        logger.error.assert_called_once()
        assert logger.error.call_args.kwargs["error_type"] == "RuntimeError"
