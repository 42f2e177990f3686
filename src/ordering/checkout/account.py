"""Sign-in and registration form validation.

Like the checkout form, every field is checked first and all problems are
raised together in one ValidationError keyed by field.
"""

import re

from protean.exceptions import ValidationError

ACCOUNT_EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S{2,}$")

MIN_PASSWORD_LENGTH = 6
MIN_FULL_NAME_LENGTH = 2


def _check_email(email, errors):
    email = (email or "").strip()
    if not email:
        errors["email"] = ["Email is required"]
    elif not ACCOUNT_EMAIL_PATTERN.match(email):
        errors["email"] = ["Enter a valid email address"]
    return email.lower()


def _check_password(password, errors):
    if not password:
        errors["password"] = ["Password is required"]
    elif len(password) < MIN_PASSWORD_LENGTH:
        errors["password"] = [f"Password must be at least {MIN_PASSWORD_LENGTH} characters"]


def local_phone(raw):
    """Bring a Kenyan number to the ten-digit ``0XXXXXXXXX`` form.

    Returns None when the digits cannot make such a number.
    """
    digits = re.sub(r"\D", "", raw or "")
    if digits.startswith("254"):
        digits = "0" + digits[3:]
    elif digits.startswith("7"):
        digits = "0" + digits
    if len(digits) == 10 and digits.startswith("0"):
        return digits
    return None


def validate_login(email, password):
    errors = {}
    cleaned = {"email": _check_email(email, errors)}
    _check_password(password, errors)

    if errors:
        raise ValidationError(errors)

    cleaned["password"] = password
    return cleaned


def validate_registration(full_name, email, password, confirm_password, phone=None, accepted_terms=True):
    """Validate the sign-up form.

    The phone is optional. When present it is returned as ``0XXXXXXXXX``.
    ``confirm_password`` must repeat ``password`` exactly.
    """
    errors = {}
    cleaned = {}

    name = (full_name or "").strip()
    if not name:
        errors["full_name"] = ["Full name is required"]
    elif len(name) < MIN_FULL_NAME_LENGTH:
        errors["full_name"] = [f"Enter at least {MIN_FULL_NAME_LENGTH} characters"]
    cleaned["full_name"] = name

    cleaned["email"] = _check_email(email, errors)

    phone = (phone or "").strip()
    cleaned["phone"] = None
    if phone:
        cleaned["phone"] = local_phone(phone)
        if cleaned["phone"] is None:
            errors["phone"] = ["Enter a valid phone like 07xx xxx xxx"]

    _check_password(password, errors)
    if not confirm_password:
        errors["confirm_password"] = ["Please confirm your password"]
    elif password != confirm_password:
        errors["confirm_password"] = ["Passwords don't match"]

    if not accepted_terms:
        errors["accepted_terms"] = ["You must accept the Terms & Privacy Policy"]

    if errors:
        raise ValidationError(errors)

    cleaned["password"] = password
    return cleaned
