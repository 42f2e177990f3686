"""Checkout form validation.

Every field is checked before anything is raised, so the shopper sees all
problems at once, each next to its own field.
"""

import re

from protean.exceptions import ValidationError

from ordering.shared.phone import normalize_phone

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_checkout(
    customer_name,
    phone,
    address,
    email=None,
    notes=None,
    use_phone_for_payment=True,
):
    """Validate and clean the checkout form.

    Returns a dict of cleaned values with the phone in canonical form and
    ``payment_phone`` set when the shopper wants the payment prompt sent to
    that number. Raises one ValidationError carrying every field error.
    """
    errors = {}
    cleaned = {}

    name = (customer_name or "").strip()
    if not name:
        errors["customer_name"] = ["Name is required"]
    cleaned["customer_name"] = name

    try:
        cleaned["phone"] = normalize_phone(phone)
    except ValidationError as exc:
        errors.update(exc.messages)

    delivery_address = (address or "").strip()
    if not delivery_address:
        errors["address"] = ["Delivery address is required"]
    cleaned["address"] = delivery_address

    email = (email or "").strip()
    if email and not EMAIL_PATTERN.match(email):
        errors["email"] = ["Enter a valid email address"]
    cleaned["email"] = email or None

    cleaned["notes"] = (notes or "").strip() or None

    if errors:
        raise ValidationError(errors)

    cleaned["payment_phone"] = cleaned["phone"] if use_phone_for_payment else None
    return cleaned
