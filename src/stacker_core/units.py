import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

MM = float
DEG = float


def parse_float(value: str) -> float:
    text = value.strip()
    if not text:
        raise ValueError("empty input")
    text = text.replace(",", ".")
    return float(text)


def parse_number(value: str) -> float:
    """Coerce user text to a number, falling back to ``0.0``.

    Blank, unparseable and non-finite input all map to zero so that a
    half-typed form field or a broken CSV cell never stops recomputation.
    """

    try:
        number = parse_float(value)
    except (AttributeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


# Plain decimal notation is used inside this range, exponent notation outside.
DECIMAL_NOTATION_MIN = 1e-6
DECIMAL_NOTATION_MAX = 1e21


def _non_finite_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    return "Infinity" if value > 0 else "-Infinity"


def _exponent_suffix(exponent: int) -> str:
    return f"e{'+' if exponent >= 0 else '-'}{abs(exponent)}"


def _quantize_half_up(value: Decimal, exponent: int) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = 1000
        return value.quantize(Decimal((0, (1,), exponent)), rounding=ROUND_HALF_UP)


def format_number(value: float) -> str:
    """Shortest round-trip text, ``127`` rather than ``127.0``.

    Exponent notation (``1e-7``, ``1.5e+21``) only appears outside
    ``[1e-6, 1e21)``.
    """
    value = float(value)
    if not math.isfinite(value):
        return _non_finite_text(value)
    if value == 0:
        return "0"

    sign, digit_tuple, exponent = Decimal(repr(value)).as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    stripped = digits.rstrip("0")
    exponent += len(digits) - len(stripped)
    digits = stripped
    point = len(digits) + exponent
    prefix = "-" if sign else ""

    if DECIMAL_NOTATION_MIN <= abs(value) < DECIMAL_NOTATION_MAX:
        if point <= 0:
            return f"{prefix}0.{'0' * -point}{digits}"
        if point >= len(digits):
            return f"{prefix}{digits}{'0' * (point - len(digits))}"
        return f"{prefix}{digits[:point]}.{digits[point:]}"

    mantissa = digits[0] + (f".{digits[1:]}" if len(digits) > 1 else "")
    return f"{prefix}{mantissa}{_exponent_suffix(point - 1)}"


def format_fixed(value: float, ndigits: int = 2) -> str:
    """Fixed-point text; exact binary ties round away from zero."""
    value = float(value)
    if not math.isfinite(value):
        return _non_finite_text(value)
    if abs(value) >= DECIMAL_NOTATION_MAX:
        return format_number(value)
    if value == 0:
        value = 0.0
    return f"{_quantize_half_up(Decimal(value), -ndigits):f}"


def format_exponential(value: float, ndigits: int = 6) -> str:
    """Exponent notation with an unpadded exponent, e.g. ``5.753833e-3``."""
    value = float(value)
    if not math.isfinite(value):
        return _non_finite_text(value)
    if value == 0:
        return ("0." + "0" * ndigits if ndigits else "0") + _exponent_suffix(0)

    exact = Decimal(abs(value))
    exponent = exact.adjusted()
    rounded = _quantize_half_up(exact, exponent - ndigits)
    if rounded.adjusted() > exponent:
        exponent += 1
        rounded = _quantize_half_up(exact, exponent - ndigits)

    digits = "".join(str(d) for d in rounded.as_tuple().digits)
    mantissa = digits[0] + (f".{digits[1:]}" if ndigits else "")
    prefix = "-" if value < 0 else ""
    return f"{prefix}{mantissa}{_exponent_suffix(exponent)}"
