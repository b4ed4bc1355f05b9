"""
Number formatting helpers for generated CSS values
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext

# Extra significant digits on top of integer digits + precision
_CONTEXT_MARGIN = 10


def to_fixed(value: float, precision: int) -> str:
    """Format a number with exactly `precision` decimal digits

    Rounds the exact binary value half away from zero, so ties such as
    0.125 -> "0.13" and -0.125 -> "-0.13" come out the same way browsers and
    JavaScript tooling print them. Trailing zeros are kept: 16 -> "16.00".
    Negative zero prints as zero; values that round to zero from below keep
    their sign: -0.001 -> "-0.00".
    """
    if value == 0:
        value = 0.0

    exact = Decimal(value)
    quantum = Decimal(1).scaleb(-precision)

    with localcontext() as ctx:
        ctx.prec = max(exact.adjusted() + 1, 1) + precision + _CONTEXT_MARGIN
        return f"{exact.quantize(quantum, rounding=ROUND_HALF_UP):f}"


def with_unit(value: float, precision: int, unit: str) -> str:
    """Fixed-point number followed by a CSS unit, e.g. "1.25rem" """
    return f"{to_fixed(value, precision)}{unit}"
