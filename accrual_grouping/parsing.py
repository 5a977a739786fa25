"""Cell, amount and identifier parsing."""

from decimal import Decimal
from typing import Iterable

ID_DELIMITER = "-"


class MissingColumnsError(ValueError):
    """Raised when a sheet lacks one or more required header labels."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required columns: {missing}")


def cell_text(value) -> str:
    """Render a cell value the way it reads in the sheet.

    Numeric cells lose a trailing ``.0`` so that whole numbers read as
    integers; everything else goes through ``str``.

    Args:
        value: The raw openpyxl cell value (str, int, float, Decimal, None...)

    Returns:
        The cell text, or an empty string for empty cells
    """
    if value is None:
        return ""

    if isinstance(value, str):
        return value

    if isinstance(value, float) and value.is_integer():
        return str(int(value))

    return str(value)


def parse_amount(value: str) -> Decimal:
    """Parse an amount cell counted in kopecks into roubles.

    Every character other than ``-`` and ASCII digits is dropped (spaces,
    thousands separators, decimal points, currency signs), the remainder is
    read as a signed integer number of minor units and divided by 100.

    Args:
        value: The raw cell text

    Returns:
        The amount as a Decimal with two decimal places

    Raises:
        ValueError: If nothing parseable is left after cleaning (e.g. an empty
            cell, a lone ``-``, or a misplaced sign)
    """
    cleaned = "".join(ch for ch in value if ch == "-" or "0" <= ch <= "9")
    if not cleaned:
        raise ValueError("no digits in amount")

    try:
        minor_units = int(cleaned)
    except ValueError:
        raise ValueError(f"invalid amount {cleaned!r}") from None

    return Decimal(minor_units).scaleb(-2)


def normalize_accrual_id(accrual_id: str) -> str:
    """Cut an accrual ID down to its first two segments.

    ``"X-1-A"`` becomes ``"X-1"``; IDs with fewer than three segments are
    returned unchanged, which makes the function idempotent.
    """
    parts = accrual_id.split(ID_DELIMITER)
    if len(parts) > 2:
        return ID_DELIMITER.join(parts[:2])
    return accrual_id


def ensure_required(headers: Iterable[str], required: Iterable[str]) -> dict[str, int]:
    """Map every header label to its 0-based position, checking required ones.

    A label repeated in the header row maps to its last occurrence.

    Raises:
        MissingColumnsError: If any required label is absent
    """
    positions = {header: idx for idx, header in enumerate(headers)}

    missing = [h for h in required if h not in positions]
    if missing:
        raise MissingColumnsError(missing)
    return positions
