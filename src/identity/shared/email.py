"""Email normalisation for identifiers that key accounts and login attempts."""

from protean.exceptions import ValidationError

_FORBIDDEN = (";", ",", "(", ")", '"', ":", "<", ">", "[", "]", "\\")


def normalize_email(address, field="email"):
    """Return ``address`` trimmed and lower-cased, or raise ValidationError.

    Applies the structural checks every stored email must pass: exactly one
    ``@``, non-empty local and domain parts, a dotted domain without empty or
    hyphen-edged labels, and no whitespace or forbidden characters.
    """
    email = (address or "").strip().lower()

    def _reject():
        raise ValidationError({field: [f"Invalid email address: {address!r}"]})

    if not email or any(ch.isspace() for ch in email):
        _reject()

    if email.count("@") != 1:
        _reject()

    local_part, domain_part = email.split("@", 1)

    if not local_part or local_part.startswith(".") or local_part.endswith("."):
        _reject()

    if "." not in domain_part or ".." in local_part or ".." in domain_part:
        _reject()

    for label in domain_part.split("."):
        if not label or label.startswith("-") or label.endswith("-"):
            _reject()

    if any(ch in email for ch in _FORBIDDEN):
        _reject()

    return email
