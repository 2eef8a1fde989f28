"""Tests for the create/edit acceptance rules."""
import pytest

from user_api.core.exceptions import (
    InvalidEmailFormatError,
    InvalidNameFormatError,
    MissingFieldError,
    NameLengthOutOfRangeError,
    UserValidationError,
    WeakPasswordError,
)
from user_api.users.validation import (
    ValidationMode,
    is_strong_password,
    validate_create,
    validate_edit,
    validate_email,
    validate_full_name,
)


class TestEmail:
    @pytest.mark.parametrize(
        "email", ["alice@example.com", "a.b+c@sub.example.org", "x@y.z"]
    )
    def test_accepts_simple_shape(self, email):
        validate_email(email)

    @pytest.mark.parametrize(
        "email",
        [
            None,
            "",
            "alice",
            "alice@example",
            "alice example@test.com",
            "alice@exa mple.com",
            "@example.com",
            "alice@.com",
            "alice@example.",
            "alice@@example.com",
            "alice@example.com\n",
        ],
    )
    def test_rejects_malformed(self, email):
        with pytest.raises(InvalidEmailFormatError):
            validate_email(email)


class TestFullName:
    def test_accepts_letters_and_spaces(self):
        validate_full_name("Alice Smith")
        validate_full_name("abc")
        validate_full_name("A" * 100)

    @pytest.mark.parametrize("name", ["Alice1", "O'Brien", "Jean-Luc", "Zoë Ray", "Bob_Smith"])
    def test_rejects_non_letters(self, name):
        with pytest.raises(InvalidNameFormatError):
            validate_full_name(name)

    @pytest.mark.parametrize("name", ["Al", "A", "A" * 101])
    def test_rejects_out_of_range_length(self, name):
        with pytest.raises(NameLengthOutOfRangeError) as exc_info:
            validate_full_name(name)
        assert "between 3 and 100" in exc_info.value.message

    def test_missing_name_is_a_format_failure(self):
        with pytest.raises(InvalidNameFormatError):
            validate_full_name(None)


class TestPasswordStrength:
    def test_strong_password(self):
        assert is_strong_password("Abcdef1!")

    @pytest.mark.parametrize(
        "password",
        [
            "Abcde1!",      # too short
            "abcdef1!",     # no uppercase
            "ABCDEF1!",     # no lowercase
            "Abcdefg!",     # no digit
            "Abcdefg1",     # no special
            "Abcdef1_",     # '_' is not in the special set
            "Abcdef1! ",    # space is outside the allowed alphabet
            "Abcdef1!é",    # non-ASCII letter is outside the allowed alphabet
            "Abcdef١!",     # non-ASCII digit does not count
        ],
    )
    def test_weak_passwords(self, password):
        assert not is_strong_password(password)

    @pytest.mark.parametrize("special", list('!@#$%^&*(),.?":{}|<>'))
    def test_every_special_character_counts(self, special):
        assert is_strong_password(f"Abcdef1{special}")


class TestValidateCreate:
    def test_valid_input(self):
        validate_create("Alice Smith", "alice@example.com", "Abcdef1!")

    def test_email_checked_first(self):
        with pytest.raises(InvalidEmailFormatError):
            validate_create("A1", "bad", "weak")

    def test_name_checked_before_password(self):
        with pytest.raises(InvalidNameFormatError):
            validate_create("A1", "alice@example.com", "weak")

    def test_password_required(self):
        with pytest.raises(WeakPasswordError):
            validate_create("Alice Smith", "alice@example.com", None)

    def test_lenient_mode_only_checks_presence(self):
        validate_create("J0", "not-an-email", "x", mode=ValidationMode.LENIENT)

    @pytest.mark.parametrize(
        "full_name,email,password,field",
        [
            (None, "a@b.c", "x", "fullName"),
            ("J", "", "x", "email"),
            ("J", "a@b.c", None, "password"),
        ],
    )
    def test_lenient_mode_rejects_missing_fields(self, full_name, email, password, field):
        with pytest.raises(MissingFieldError) as exc_info:
            validate_create(full_name, email, password, mode=ValidationMode.LENIENT)
        assert exc_info.value.field == field
        assert exc_info.value.status_code == 400


class TestValidateEdit:
    def test_password_optional(self):
        validate_edit("alice@example.com", "Alice Smith")
        validate_edit("alice@example.com", "Alice Smith", "")

    def test_supplied_password_must_be_strong(self):
        with pytest.raises(WeakPasswordError):
            validate_edit("alice@example.com", "Alice Smith", "password")

    def test_missing_name(self):
        with pytest.raises(MissingFieldError) as exc_info:
            validate_edit("alice@example.com", None)
        assert exc_info.value.message == "Full name is required"

    def test_email_shape_checked(self):
        with pytest.raises(InvalidEmailFormatError):
            validate_edit("alice", "Alice Smith")

    def test_name_length(self):
        with pytest.raises(NameLengthOutOfRangeError):
            validate_edit("alice@example.com", "Al")

    def test_lenient_mode_requires_only_email(self):
        validate_edit("whatever", None, "weak", mode=ValidationMode.LENIENT)
        with pytest.raises(MissingFieldError):
            validate_edit(None, "Alice Smith", mode=ValidationMode.LENIENT)

    def test_all_failures_are_validation_errors(self):
        with pytest.raises(UserValidationError):
            validate_edit("alice@example.com", "A!")


class TestLenientNameLength:
    def test_create_rejects_name_longer_than_column(self):
        with pytest.raises(NameLengthOutOfRangeError) as exc_info:
            validate_create("J" * 101, "j@x.io", "x", mode=ValidationMode.LENIENT)
        assert exc_info.value.message == "Full name must be between 1 and 100 characters"

    def test_create_accepts_name_at_column_limit(self):
        validate_create("J" * 100, "j@x.io", "x", mode=ValidationMode.LENIENT)

    def test_edit_rejects_long_name(self):
        with pytest.raises(NameLengthOutOfRangeError):
            validate_edit("j@x.io", "J" * 150, mode=ValidationMode.LENIENT)
