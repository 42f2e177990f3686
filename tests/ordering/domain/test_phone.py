"""Tests for phone number normalization."""

import pytest
from ordering.shared.phone import is_valid_phone, normalize_phone
from protean.exceptions import ValidationError


class TestNormalizePhone:
    def test_local_and_international_forms_agree(self):
        assert normalize_phone("0722690154") == normalize_phone("254722690154") == "254722690154"

    @pytest.mark.parametrize(
        "raw",
        ["0722 690 154", "+254 722 690 154", "0722-690-154", "(0722) 690154"],
    )
    def test_formatting_characters_are_ignored(self, raw):
        assert normalize_phone(raw) == "254722690154"

    def test_safaricom_01_prefix(self):
        assert normalize_phone("0110123456") == "254110123456"

    @pytest.mark.parametrize(
        "raw",
        ["", None, "072269015", "07226901545", "0522690154", "255722690154", "2540722690154", "hello"],
    )
    def test_rejects_unrecognized_shapes(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            normalize_phone(raw)
        assert "phone" in exc_info.value.messages

    def test_error_key_can_be_chosen(self):
        with pytest.raises(ValidationError) as exc_info:
            normalize_phone("123", field="payment_phone")
        assert "payment_phone" in exc_info.value.messages


class TestIsValidPhone:
    def test_valid(self):
        assert is_valid_phone("0722690154")

    def test_invalid(self):
        assert not is_valid_phone("12345")
