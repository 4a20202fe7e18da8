"""
Editable numeric text shown on the calculator display.

The display keeps the number as typed (so "12." or "0.0" survive while the
user is still entering digits) and only turns it into a float when the value
is needed for arithmetic. Parsing and formatting follow the rules of a
JavaScript-style number display: lenient leading-prefix parsing and the
shortest round-trip rendering, with "Infinity"/"NaN" for non-finite values.
"""

import logging
import math
import re
from decimal import Decimal

log = logging.getLogger("calculator.display")

DECIMAL_POINT = "."

# Longest numeric prefix, as accepted by a lenient parseFloat
_NUMBER_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def parse_number(text: str) -> float:
    """Read the leading number out of `text`; NaN when there is none."""
    match = _NUMBER_PREFIX.match(str(text))
    if match is None:
        return math.nan
    return float(match.group(1).replace("Infinity", "inf"))


def format_number(value: float) -> str:
    """Render a float the way the display shows it: 12, 0.5, 1e-7, Infinity."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"  # -0 as well

    sign = "-" if value < 0 else ""
    # repr() gives the shortest digits that round-trip
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    n = k + exponent  # position of the decimal point relative to the digits

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = digits[:n] + "." + digits[n:]
    elif -6 < n <= 0:
        body = "0." + "0" * (-n) + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
        body = "%se%s%d" % (mantissa, "+" if e >= 0 else "-", abs(e))
    return sign + body


def _check_digit(digit) -> str:
    s = str(digit)
    if len(s) != 1 or not s.isdigit():
        raise ValueError("not a single digit: %r" % (digit,))
    return s


class DisplayText:
    """The number currently on screen, kept as text."""

    def __init__(self, text: str = "0"):
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    @property
    def value(self) -> float:
        return parse_number(self._text)

    @property
    def has_decimal_point(self) -> bool:
        return DECIMAL_POINT in self._text

    def is_reset(self) -> bool:
        return self._text == "0"

    def reset(self):
        self._text = "0"

    def replace_with_digit(self, digit):
        self._text = _check_digit(digit)
        log.debug("Display replaced: %s", self._text)

    def append_digit(self, digit):
        self._text += _check_digit(digit)
        log.debug("Digit appended: %s", self._text)

    def add_decimal_point(self) -> bool:
        """Append a decimal point unless one is already there."""
        if self.has_decimal_point:
            log.debug("Decimal point ignored: already in %s", self._text)
            return False
        self._text += DECIMAL_POINT
        log.debug("Decimal point added: %s", self._text)
        return True

    def set_number(self, value: float):
        self._text = format_number(value)

    def __repr__(self):
        return "DisplayText(%r)" % self._text
