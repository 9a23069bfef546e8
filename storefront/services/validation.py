"""Guest checkout form validation"""

import re

from ..models.forms import GuestForm, FormErrors

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

REQUIRED = "Required"
INVALID_EMAIL = "Invalid email"


def validate(form: GuestForm) -> FormErrors:
    """Return one message per invalid field; empty when the form can be submitted"""
    errors: FormErrors = {}
    if not form.name.strip():
        errors["name"] = REQUIRED
    if not form.email.strip():
        errors["email"] = REQUIRED
    elif not EMAIL_PATTERN.match(form.email):
        errors["email"] = INVALID_EMAIL
    if not form.phone.strip():
        errors["phone"] = REQUIRED
    if not form.address.strip():
        errors["address"] = REQUIRED
    if not form.province.strip():
        errors["province"] = REQUIRED
    return errors


def clear_field_error(errors: FormErrors, field: str) -> FormErrors:
    """Drop the error for a field the shopper just edited"""
    return {key: message for key, message in errors.items() if key != field}
