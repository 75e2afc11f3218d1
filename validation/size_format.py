from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Context, Decimal

KB_BYTES = 1000
MB_BYTES = 1000 * 1000
KIB_BYTES = 1024
MIB_BYTES = 1024 * 1024

SUFFIXES = {
    1: "bytes",
    KB_BYTES: "kB",
    MB_BYTES: "MB",
    KIB_BYTES: "KiB",
    MIB_BYTES: "MiB",
}

# Largest coefficient last; formatting walks these from the end
DECIMAL_LADDER = (1, KB_BYTES, MB_BYTES)
BINARY_LADDER = (1, KIB_BYTES, MIB_BYTES)

MAX_DECIMALS = 2
_TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class SizeLimit:
    """Size and limit rendered against the same unit."""

    size: str
    limit: str
    suffix: str
    coefficient: int


def format_size_limit(size_bytes: int, limit_bytes: int, binary_format: bool) -> SizeLimit:
    """Render an oversized file's size and the limit it broke.

    Picks the largest unit in which the limit is exact with at most two
    decimals, then rounds the size to two decimals in that same unit. If
    rounding makes the two read the same ("5 MB exceeds 5 MB"), falls to
    the next smaller unit until they differ. Bytes are always exact, so
    the walk ends there at the latest.

    Args:
        size_bytes: Actual file size, greater than ``limit_bytes``.
        limit_bytes: Configured maximum in raw bytes.
        binary_format: Use KiB/MiB (base 1024) instead of kB/MB.

    Returns:
        SizeLimit with both strings, the unit suffix and its coefficient.
    """
    ladder = BINARY_LADDER if binary_format else DECIMAL_LADDER
    index = len(ladder) - 1

    limit_text = _exact(limit_bytes, ladder[index])
    while index > 0 and decimal_places(limit_text) > MAX_DECIMALS:
        index -= 1
        limit_text = _exact(limit_bytes, ladder[index])

    size_text = _rounded(size_bytes, ladder[index])
    while index > 0 and size_text == limit_text:
        index -= 1
        limit_text = _exact(limit_bytes, ladder[index])
        size_text = _rounded(size_bytes, ladder[index])

    coefficient = ladder[index]
    return SizeLimit(
        size=size_text,
        limit=limit_text,
        suffix=SUFFIXES[coefficient],
        coefficient=coefficient,
    )


def decimal_places(text: str) -> int:
    """Count the digits after the decimal separator of a rendered number."""
    _, _, fraction = text.partition(".")
    return len(fraction)


def _exact(value: int, coefficient: int) -> str:
    # Both ladders divide by powers of 2 and 5, so the quotient terminates.
    # Precision must cover the integer digits plus up to 20 decimals (2**-20).
    context = Context(prec=len(str(value)) + 25)
    return _render(context.divide(Decimal(value), Decimal(coefficient)))


def _rounded(value: int, coefficient: int) -> str:
    context = Context(prec=len(str(value)) + 25)
    quotient = context.divide(Decimal(value), Decimal(coefficient))
    return _render(quotient.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP, context=context))


def _render(number: Decimal) -> str:
    """Plain notation, no trailing zeros: 1.10 -> "1.1", 2E+3 -> "2000"."""
    text = format(number, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
