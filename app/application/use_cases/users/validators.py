"""Common validation helpers for user use cases."""

from email_validator import EmailNotValidError, validate_email


def normalize_email(email: str) -> str:
    """Return the normalized address or raise ``ValueError``."""

    try:
        result = validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError("email must be an email") from exc
    return result.normalized.lower()
