"""
Calculator state machine.

One token per user action goes through `Calculator.handle_token`; the display
text and the short history of finished calculations are read back afterwards.
Only one binary operation is pending at a time, like a pocket calculator:
there is no precedence and no expression parsing.
"""

import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from histcalc_display import DisplayText, format_number, parse_number

log = logging.getLogger("calculator.core")

# ------------------ TOKENS ------------------
CLEAR = "C"
EQUALS = "="
ADDITION = "+"
SUBTRACTION = "-"
MULTIPLICATION = "x"
DIVISION = "/"
PERCENTAGE = "%"
DECIMAL = "."
NEGATIVE = "+/-"

OPERATORS = (ADDITION, SUBTRACTION, MULTIPLICATION, DIVISION)
SYMBOLS = (NEGATIVE, DECIMAL, PERCENTAGE)

HISTORY_SIZE = 3


# ------------------ STATE ------------------
@dataclass(frozen=True)
class Idle:
    """No binary operation is waiting for its right-hand side."""


@dataclass(frozen=True)
class PendingOperation:
    operand: str  # raw display text, parsed only at Equals
    operator: str


State = Union[Idle, PendingOperation]
IDLE = Idle()


class HistoryQueue:
    """Completed calculations, oldest first; the oldest drops out when full."""

    def __init__(self, capacity: int = HISTORY_SIZE):
        if capacity < 1:
            raise ValueError("history capacity must be positive")
        self._entries = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._entries.maxlen

    def push(self, entry: str):
        if len(self._entries) == self._entries.maxlen:
            log.debug("History full, dropping: %s", self._entries[0])
        self._entries.append(entry)

    def clear(self):
        self._entries.clear()

    def entries(self) -> Tuple[str, ...]:
        return tuple(self._entries)

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self.entries())


def is_digit_token(token) -> bool:
    # 3.0 counts as a digit, 3.5 and True do not
    if isinstance(token, bool) or not isinstance(token, (int, float)):
        return False
    return float(token).is_integer() and 0 <= token <= 9


def apply_operator(previous: float, current: float, op: str) -> float:
    try:
        if op == ADDITION:
            return previous + current
        if op == SUBTRACTION:
            return previous - current
        if op == MULTIPLICATION:
            return previous * current
        if op == DIVISION:
            return previous / current
    except ZeroDivisionError:
        log.warning("Division by zero: %s / %s", previous, current)
        if previous == 0 or math.isnan(previous):
            return math.nan
        return math.copysign(math.inf, previous) * math.copysign(1.0, current)
    raise ValueError("unknown operator: %r" % (op,))


class Calculator:
    def __init__(self, history_size: int = HISTORY_SIZE):
        self._history = HistoryQueue(history_size)
        self.reset()

    def reset(self):
        """Back to the start-up state, history included."""
        self._display = DisplayText()
        self._ready_to_replace = True
        self._state: State = IDLE
        self._history.clear()
        log.debug("Calculator reset")

    # ------------------ READ-ONLY VIEW ------------------
    @property
    def display(self) -> str:
        return self._display.text

    @property
    def history(self) -> Tuple[str, ...]:
        return self._history.entries()

    @property
    def history_size(self) -> int:
        return self._history.capacity

    @property
    def ready_to_replace(self) -> bool:
        return self._ready_to_replace

    @property
    def state(self) -> State:
        return self._state

    @property
    def pending_operand(self) -> str:
        if isinstance(self._state, PendingOperation):
            return self._state.operand
        return "0"

    @property
    def pending_operator(self) -> Optional[str]:
        if isinstance(self._state, PendingOperation):
            return self._state.operator
        return None

    def at_defaults(self) -> bool:
        return self._display.is_reset() and isinstance(self._state, Idle)

    # ------------------ TOKEN DISPATCH ------------------
    def handle_token(self, token):
        if token == CLEAR:
            self.clear()
        elif token == EQUALS:
            self.equals()
        elif is_digit_token(token):
            self.press_digit(token)
        elif token in OPERATORS:
            self.choose_operator(token)
        elif token in SYMBOLS:
            self.apply_symbol(token)
        else:
            log.debug("Token ignored: %r", token)

    # ------------------ TRANSITIONS ------------------
    def clear(self):
        # A clear on an already cleared calculator also wipes the history
        purge = self.at_defaults()
        self._display.reset()
        self._state = IDLE
        self._ready_to_replace = True
        if purge and len(self._history):
            self._history.clear()
            log.info("Clear: history purged")
        else:
            log.info("Clear")

    def press_digit(self, digit: int):
        digit = int(digit)
        if self._ready_to_replace:
            self._display.replace_with_digit(digit)
            self._ready_to_replace = False
        else:
            self._display.append_digit(digit)

    def choose_operator(self, op: str):
        if op not in OPERATORS:
            log.warning("Invalid operator provided: %r", op)
            return
        if isinstance(self._state, PendingOperation):
            log.debug("Pending operation %s replaced", self._state)
        self._state = PendingOperation(operand=self._display.text, operator=op)
        self._ready_to_replace = True
        log.debug("Operator set: %s (operand=%s)", op, self._display.text)

    def equals(self):
        if not isinstance(self._state, PendingOperation):
            log.warning("Equals pressed with no pending operator, ignored")
            return

        op = self._state.operator
        previous = parse_number(self._state.operand)
        current = self._display.value
        entry = "%s %s %s" % (format_number(previous), op, format_number(current))
        self._history.push(entry)

        self._ready_to_replace = True
        # The operator stays; a repeated "=" computes 0 <op> current
        self._state = PendingOperation(operand="0", operator=op)

        result = apply_operator(previous, current, op)
        self._display.set_number(result)
        log.info("Calculated: %s = %s", entry, self._display.text)

    def apply_symbol(self, symbol: str):
        if symbol == NEGATIVE:
            self._display.set_number(self._display.value * -1)
            log.debug("Sign flipped: %s", self._display.text)
        elif symbol == PERCENTAGE:
            self._display.set_number(self._display.value * 0.01)
            log.debug("Percentage: %s", self._display.text)
        elif symbol == DECIMAL:
            self._display.add_decimal_point()
        else:
            log.warning("Invalid symbol provided: %r", symbol)
