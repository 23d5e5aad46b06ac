"""Commission amount parsing.

Amounts arrive as numbers from JSON bodies and as text from the command
line, where they may carry a rupee prefix and Indian digit grouping
("₹1,04,976.24"). Both paths end in the same 2-place Decimal that fits the
``Numeric(15, 2)`` amount column.
"""

import re
from decimal import Decimal, InvalidOperation

from commtrack.domain.errors import ValidationError, amount_out_of_range, invalid_amount

CENTS = Decimal("0.01")

# Numeric(15, 2) leaves 13 digits before the decimal point
MAX_INTEGER_DIGITS = 13
AMOUNT_LIMIT = Decimal(10) ** MAX_INTEGER_DIGITS

# Integer part: plain digits, thousands grouping (1,234,567) or
# lakh/crore grouping (12,34,567)
_AMOUNT_TEXT = re.compile(
    r"""
    ^(?P<sign>-)?\s*
    (?:₹|rs\.?|inr)?\s*
    (?P<integer>\d+|\d{1,3}(?:,\d{3})+|\d{1,2}(?:,\d{2})+,\d{3})
    (?P<fraction>\.\d+)?$
    """,
    re.IGNORECASE | re.VERBOSE,
)


def _parse_text(text: str) -> Decimal:
    cleaned = text.strip()
    negative = False
    # Accounting notation: (75.00) is -75.00
    if cleaned.startswith("(") and cleaned.endswith(")"):
        negative = True
        cleaned = cleaned[1:-1].strip()

    match = _AMOUNT_TEXT.match(cleaned)
    if match is None:
        raise ValidationError(invalid_amount(text))

    value = Decimal(match.group("integer").replace(",", "") + (match.group("fraction") or ""))
    if match.group("sign"):
        negative = not negative
    return -value if negative else value


def parse_amount(amount: Decimal | int | float | str) -> Decimal:
    """Convert a commission amount to a Decimal rounded to paise.

    Negative amounts are accepted; they record corrections.

    Args:
        amount: Decimal, int, float or text such as '1500', '-250.75',
            '₹1,04,976.24', 'Rs. 500', 'INR 2,500' or '(75.00)'

    Returns:
        Amount quantized to 2 decimal places

    Raises:
        ValidationError: If the amount is not a finite number or does not fit
            13 digits before the decimal point
    """
    if isinstance(amount, bool):
        raise ValidationError(invalid_amount(amount))

    if isinstance(amount, str):
        value = _parse_text(amount)
    elif isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, (int, float)):
        value = Decimal(str(amount))
    else:
        raise ValidationError(invalid_amount(amount))

    if not value.is_finite():
        raise ValidationError(invalid_amount(amount))

    try:
        value = value.quantize(CENTS)
    except InvalidOperation:
        raise ValidationError(amount_out_of_range(amount, MAX_INTEGER_DIGITS)) from None

    if abs(value) >= AMOUNT_LIMIT:
        raise ValidationError(amount_out_of_range(amount, MAX_INTEGER_DIGITS))
    return value
