"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

CURRENCY_SUFFIX_PATTERN = re.compile(r"\s*(?:kr|sek|:-)\s*$", re.IGNORECASE)
THOUSANDS_GROUP_PATTERN = re.compile(r"^\d{3}$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles Swedish and international formats:
    - "1 234,56" or "1234,56" (comma decimal, space thousands)
    - "1.234,56" (dot thousands, comma decimal)
    - "1,234.56" or "33,000.00" (comma thousands, dot decimal)
    - "33,000" / "1.234" (a single separator followed by exactly three
      digits is a thousands separator)
    - "159 kr", "159 SEK", "159:-" (currency suffixes)
    - "-123,45", "−123,45", "(123,45)" (negative)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    cleaned = CURRENCY_SUFFIX_PATTERN.sub("", amount_str.strip()).strip()

    # Handle parentheses notation and leading minus (including U+2212)
    is_negative = False
    if cleaned.startswith("(") and cleaned.endswith(")"):
        is_negative = True
        cleaned = cleaned[1:-1].strip()
    if cleaned.startswith("-") or cleaned.startswith("−"):
        is_negative = True
        cleaned = cleaned[1:].strip()

    last_comma = cleaned.rfind(",")
    last_dot = cleaned.rfind(".")

    if last_comma > -1 and last_dot > -1:
        # Both present: whichever comes last is the decimal separator
        if last_dot > last_comma:
            cleaned = cleaned.replace(",", "")
        else:
            cleaned = cleaned.replace(".", "").replace(",", ".")
    elif last_comma > -1:
        if THOUSANDS_GROUP_PATTERN.match(cleaned[last_comma + 1:]):
            cleaned = cleaned.replace(",", "")
        else:
            cleaned = cleaned.replace(",", ".")
    elif last_dot > -1:
        if THOUSANDS_GROUP_PATTERN.match(cleaned[last_dot + 1:]):
            cleaned = cleaned.replace(".", "")

    cleaned = re.sub(r"\s", "", cleaned)

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount
