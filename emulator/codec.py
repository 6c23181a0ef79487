from dataclasses import dataclass
from enum import Enum

# === SYMBOLS AND STATES ===
SYMBOL_ZERO = 1
SYMBOL_ONE = 2
SYMBOL_BLANK = 3
FIRST_EXTENDED_SYMBOL = 4

START_STATE = 1
ACCEPT_STATE = 2

BLANK_CHAR = "_"
EXTENDED_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

ZERO_BIT = "0"
SEPARATOR_BIT = "1"
TRANSITION_DELIMITER = "11"

LEFT_CODE = 1
RIGHT_CODE = 2


class Direction(Enum):
    LEFT = "L"
    RIGHT = "R"


@dataclass(frozen=True)
class Transition:
    from_state: int
    read_symbol: int
    to_state: int
    write_symbol: int
    direction: Direction

    @property
    def key(self):
        return (self.from_state, self.read_symbol)

    def __str__(self):
        return (f"δ({state_label(self.from_state)}, {symbol_char(self.read_symbol)}) = "
                f"({state_label(self.to_state)}, {symbol_char(self.write_symbol)}, {self.direction.value})")


# === UNARY RUNS ===
def unary(n):
    return ZERO_BIT * n


def decode_unary_run(s, pos):
    """Count consecutive '0' characters in s starting at pos."""
    count = 0
    while pos + count < len(s) and s[pos + count] == ZERO_BIT:
        count += 1
    return count


def direction_from_code(code):
    return Direction.LEFT if code == LEFT_CODE else Direction.RIGHT


def direction_code(direction):
    return LEFT_CODE if direction is Direction.LEFT else RIGHT_CODE


# === LABELS ===
def state_label(state):
    return f"q{state}"


def symbol_char(symbol):
    """Default display character for a symbol. Symbols past the letters get a generated label."""
    if symbol == SYMBOL_ZERO:
        return "0"
    if symbol == SYMBOL_ONE:
        return "1"
    if symbol == SYMBOL_BLANK:
        return BLANK_CHAR
    offset = symbol - FIRST_EXTENDED_SYMBOL
    if 0 <= offset < len(EXTENDED_CHARS):
        return EXTENDED_CHARS[offset]
    return f"X{symbol}"


class Alphabet:
    """Character <-> symbol registry. Unknown characters get the next free symbol on first use."""

    def __init__(self):
        self._char_to_symbol = {}
        self._symbol_to_char = {}
        for symbol in range(SYMBOL_ZERO, FIRST_EXTENDED_SYMBOL + len(EXTENDED_CHARS)):
            self._add(symbol_char(symbol), symbol)

    def _add(self, char, symbol):
        self._char_to_symbol[char] = symbol
        self._symbol_to_char[symbol] = char

    def symbol_for(self, char):
        symbol = self._char_to_symbol.get(char)
        if symbol is None:
            symbol = max(self._symbol_to_char) + 1
            self._add(char, symbol)
        return symbol

    def char_for(self, symbol):
        return self._symbol_to_char.get(symbol, symbol_char(symbol))

    def symbols_for(self, text):
        return [self.symbol_for(c) for c in text]

    def render(self, symbols):
        return "".join(self.char_for(s) for s in symbols)

    def __contains__(self, char):
        return char in self._char_to_symbol

    def __len__(self):
        return len(self._symbol_to_char)


# === ENCODING ===
def encode_transition(t: Transition) -> str:
    fields = (t.from_state, t.read_symbol, t.to_state, t.write_symbol, direction_code(t.direction))
    return SEPARATOR_BIT.join(unary(n) for n in fields)


def encode_transitions(transitions, delimiter=True) -> str:
    """Join encoded transitions. With delimiter=False a single '1' joins them, which only the lenient scan reads."""
    joiner = TRANSITION_DELIMITER if delimiter else SEPARATOR_BIT
    return joiner.join(encode_transition(t) for t in transitions)
