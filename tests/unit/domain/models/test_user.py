"""
Unit tests for the User aggregate and its settings.
"""

import pytest
from decimal import Decimal

from app.domain.models.user import (
    User,
    UserSettings,
    LicenseStatus,
    UserProfileUpdatedEvent,
    generate_license_key,
)
from app.domain.models.value_objects import InvoiceSequence
from app.domain.models.base import ValidationError
from tests.factories import make_user


class TestUser:
    """Test cases for User aggregate."""

    def test_email_is_normalised(self):
        user = User(id="u1", email="  Owner@Example.COM ", name="Budi")

        assert user.email == "owner@example.com"

    @pytest.mark.parametrize("email", ["", "not-an-email"])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(ValidationError):
            User(id="u1", email=email, name="Budi")

    def test_short_name_rejected(self):
        with pytest.raises(ValidationError):
            User(id="u1", email="a@b.co", name="B")

    def test_short_password_rejected(self):
        with pytest.raises(ValidationError):
            User.validate_password("short")

    def test_update_profile_applies_only_given_fields(self):
        user = make_user(business_address="Jl. Sudirman 1")

        applied = user.update_profile(business_name="  Toko Budi ")

        assert applied == {"business_name": "Toko Budi"}
        assert user.business_address == "Jl. Sudirman 1"
        assert isinstance(user.pull_events()[0], UserProfileUpdatedEvent)

    def test_business_phone_normalised_to_e164(self):
        user = make_user()

        user.update_profile(business_phone="0812-3456-7890")

        assert user.business_phone == "+6281234567890"

    @pytest.mark.parametrize("phone", ["12345", "0212345678", "+6591234567"])
    def test_non_indonesian_mobile_rejected(self, phone):
        with pytest.raises(ValidationError):
            make_user().update_profile(business_phone=phone)

    def test_empty_strings_clear_contact_fields(self):
        user = make_user(
            business_phone="+6281234567890",
            business_email="shop@example.com",
            business_address="Jl. Sudirman 1",
        )

        user.update_profile(business_phone="", business_email="", business_address="")

        assert user.business_phone is None
        assert user.business_email is None
        assert user.business_address is None

    def test_invalid_business_email_rejected(self):
        with pytest.raises(ValidationError):
            make_user().update_profile(business_email="nope")

    def test_short_business_name_rejected(self):
        with pytest.raises(ValidationError):
            make_user().update_profile(business_name="X")

    def test_no_changes_emit_no_event(self):
        user = make_user()

        assert user.update_profile() == {}
        assert user.pull_events() == []

    def test_set_password_hash_marks_has_password(self):
        user = make_user(password_hash=None)

        user.set_password_hash("hashed:newpassword")

        assert user.has_password is True


class TestUserSettings:
    """Test cases for per-tenant invoice settings."""

    def setup_method(self):
        self.settings = UserSettings(id="s1", user_id="u1")

    def test_defaults(self):
        assert self.settings.invoice_prefix == "INV"
        assert self.settings.next_invoice_number == 1
        assert self.settings.currency == "IDR"
        assert self.settings.license_status == LicenseStatus.ACTIVE
        assert len(self.settings.license_key) == 32

    def test_license_keys_are_unique(self):
        assert generate_license_key() != generate_license_key()

    def test_sequence_view(self):
        self.settings.next_invoice_number = 7

        assert self.settings.sequence == InvoiceSequence("INV", 7)

    def test_advance_moves_counter_forward(self):
        self.settings.advance_to(InvoiceSequence("INV", 2))

        assert self.settings.next_invoice_number == 2

    def test_counter_never_moves_backwards(self):
        self.settings.next_invoice_number = 5

        with pytest.raises(ValidationError):
            self.settings.advance_to(InvoiceSequence("INV", 5))

    def test_update_invoice_settings(self):
        self.settings.update_invoice_settings(invoice_prefix="FK-", tax_rate=Decimal("11"))

        assert self.settings.invoice_prefix == "FK-"
        assert self.settings.tax_rate == Decimal("11")

    @pytest.mark.parametrize("prefix", ["", "TOO-LONG-PREFIX", "IN V", "INV/"])
    def test_invalid_prefix_rejected(self, prefix):
        with pytest.raises(ValidationError):
            self.settings.update_invoice_settings(invoice_prefix=prefix)

    @pytest.mark.parametrize("rate", [Decimal("-1"), Decimal("1.00001"), Decimal("100000")])
    def test_invalid_tax_rate_rejected(self, rate):
        with pytest.raises(ValidationError):
            self.settings.update_invoice_settings(tax_rate=rate)

    def test_tax_rate_keeps_four_decimals(self):
        self.settings.update_invoice_settings(tax_rate="112.5125")

        assert self.settings.tax_rate == Decimal("112.5125")

    def test_suspended(self):
        self.settings.license_status = LicenseStatus.SUSPENDED

        assert self.settings.is_suspended
