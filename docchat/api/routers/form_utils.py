"""Helpers for multipart form fields."""


def split_phone_numbers(raw: str | None) -> list[str]:
    """Split a comma-separated phone number field, dropping blanks."""
    if not raw:
        return []
    return [number.strip() for number in raw.split(",") if number.strip()]
