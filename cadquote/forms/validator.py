"""Validation of lead-generation form payloads.

Errors block a submission; warnings are advisory and shown alongside it.
"""

import re

from cadquote.forms.models import ContactForm, FormValidationResult, QuoteRequestForm

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_MOBILE = re.compile(r"^(?:(?:\+|00)86)?1[3-9]\d{9}$")
_LANDLINE = re.compile(r"^(?:(?:\+|00)86)?(?:0\d{2,3}-?)?\d{7,8}$")
_PHONE_SEPARATORS = re.compile(r"[\s-]")

_MIN_MESSAGE_LENGTH = 10
_LARGE_ORDER_QUANTITY = 10_000
_EXTREME_PRECISION_MAX_QUANTITY = 100
_IMMEDIATE_DELIVERY_MAX_QUANTITY = 10


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL.fullmatch(email))


def is_valid_phone(phone: str) -> bool:
    """Accept mainland China mobile and landline numbers; spaces and dashes are ignored."""
    digits = _PHONE_SEPARATORS.sub("", phone)
    return bool(_MOBILE.fullmatch(digits) or _LANDLINE.fullmatch(digits))


def is_present(value: str | None) -> bool:
    return bool(value and value.strip())


def _check_identity(name: str, email: str, errors: list[str]) -> None:
    if not is_present(name):
        errors.append("Please enter your name")

    if not is_present(email):
        errors.append("Please enter your email address")
    elif not is_valid_email(email):
        errors.append("Please enter a valid email address")


def _check_phone(phone: str | None, errors: list[str]) -> None:
    if phone and not is_valid_phone(phone):
        errors.append("Please enter a valid phone number")


def validate_contact_form(data: ContactForm) -> FormValidationResult:
    errors: list[str] = []
    warnings: list[str] = []

    _check_identity(data.name, data.email, errors)

    if not is_present(data.message):
        errors.append("Please describe your project")
    elif len(data.message) < _MIN_MESSAGE_LENGTH:
        warnings.append(
            f"A project description of at least {_MIN_MESSAGE_LENGTH} characters is recommended"
        )

    if not is_present(data.contact_preference):
        errors.append("Please choose a contact preference")

    if not data.privacy:
        errors.append("Please read and accept the privacy policy")

    _check_phone(data.phone, errors)

    if data.service == "other" and "service" not in (data.message or "").lower():
        warnings.append(
            'When choosing "other service", describe the service you need in the message'
        )

    return FormValidationResult(errors=errors, warnings=warnings)


def validate_quote_form(data: QuoteRequestForm) -> FormValidationResult:
    errors: list[str] = []
    warnings: list[str] = []

    _check_identity(data.name, data.email, errors)

    if not is_present(data.material):
        errors.append("Please choose a material")

    if not data.quantity or data.quantity < 1:
        errors.append("Please enter a valid quantity (at least 1 part)")
    elif data.quantity > _LARGE_ORDER_QUANTITY:
        warnings.append(
            f"For orders above {_LARGE_ORDER_QUANTITY} parts, contact sales for a dedicated quote"
        )

    _check_phone(data.phone, errors)

    if data.precision == "extreme" and data.quantity > _EXTREME_PRECISION_MAX_QUANTITY:
        warnings.append(
            "Extreme precision (±0.01mm) is costly in volume; "
            "check whether every dimension needs it"
        )

    if data.delivery == "immediate" and data.quantity > _IMMEDIATE_DELIVERY_MAX_QUANTITY:
        warnings.append(
            "Immediate delivery (12 hours) suits small batches; "
            "large orders may not finish in time"
        )

    return FormValidationResult(errors=errors, warnings=warnings)
