import pytest

from infrastructure.notifications.validation import (
    is_plausible_email,
    is_valid_phone,
    validate_target,
)


@pytest.mark.unit
class TestPhoneValidation:
    @pytest.mark.parametrize("phone", ["+61412345678", "+15005550006", "+12"])
    def test_valid(self, phone):
        assert is_valid_phone(phone)

    @pytest.mark.parametrize(
        "phone",
        [None, "", "0412345678", "+0412345678", "+61 412 345 678", "+1234567890123456"],
    )
    def test_invalid(self, phone):
        assert not is_valid_phone(phone)


@pytest.mark.unit
class TestEmailValidation:
    @pytest.mark.parametrize("email", ["jane@example.com", "a.b@mail.example.org"])
    def test_plausible(self, email):
        assert is_plausible_email(email)

    @pytest.mark.parametrize(
        "email",
        [None, "", "jane", "@example.com", "jane@", "jane@.com", "jane@example.", "a@b@c.com", "ja ne@example.com"],
    )
    def test_implausible(self, email):
        assert not is_plausible_email(email)


@pytest.mark.unit
class TestValidateTarget:
    def test_phone_channels(self):
        assert validate_target("SMS", "+61412345678") is None
        assert validate_target("WHATSAPP", "+61412345678") is None
        assert "E.164" in validate_target("SMS", "0412345678")

    def test_email_channel(self):
        assert validate_target("EMAIL", "jane@example.com") is None
        assert validate_target("EMAIL", "+61412345678") is not None

    def test_unknown_channel(self):
        assert validate_target("PIGEON", "x") == "Unsupported channel: PIGEON"
