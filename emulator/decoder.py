from emulator.codec import (
    SEPARATOR_BIT,
    TRANSITION_DELIMITER,
    ZERO_BIT,
    Transition,
    decode_unary_run,
    direction_from_code,
)
from emulator.machine import MachineDefinition

FIELDS_PER_TRANSITION = 5


# === ERRORS ===
class DecodeError(ValueError):
    pass


class EmptyEncodingError(DecodeError):
    def __init__(self):
        super().__init__("Binary encoding cannot be empty")


class InvalidCharacterError(DecodeError):
    def __init__(self, char, index):
        self.char = char
        self.index = index
        super().__init__(f"Binary encoding must contain only 0s and 1s (found {char!r} at index {index})")


class MalformedTransitionError(DecodeError):
    def __init__(self, chunk, field_count):
        self.chunk = chunk
        self.field_count = field_count
        super().__init__(f"Invalid transition format: expected {FIELDS_PER_TRANSITION} components "
                         f"but found {field_count} in {chunk!r}")


class NoTransitionsError(DecodeError):
    def __init__(self):
        super().__init__("No valid transitions found in the binary encoding")


# === STRICT DECODING ===
def _validate(encoding):
    if not encoding:
        raise EmptyEncodingError()
    for index, char in enumerate(encoding):
        if char not in (ZERO_BIT, SEPARATOR_BIT):
            raise InvalidCharacterError(char, index)
    return encoding


def _parse_chunk(chunk):
    fragments = [part for part in chunk.split(SEPARATOR_BIT) if part]
    if len(fragments) != FIELDS_PER_TRANSITION:
        raise MalformedTransitionError(chunk, len(fragments))
    from_state, read_symbol, to_state, write_symbol, direction = (len(part) for part in fragments)
    return Transition(from_state, read_symbol, to_state, write_symbol, direction_from_code(direction))


def parse_transitions(encoding):
    """Split a binary encoding on '11' and parse every chunk. Raises a DecodeError on any malformed input."""
    encoding = _validate(encoding)
    transitions = [_parse_chunk(chunk) for chunk in encoding.split(TRANSITION_DELIMITER) if chunk]
    if not transitions:
        raise NoTransitionsError()
    return transitions


def decode(encoding) -> MachineDefinition:
    return MachineDefinition(parse_transitions(encoding))


# === LENIENT EXTRACTION ===
def extract_transitions(encoding):
    """
    Best-effort left-to-right scan that never raises and never validates.
    A '11' pair is skipped as an optional delimiter, a candidate transition
    is dropped when a separator is missing or a field is an empty run, and
    any other character is skipped.
    """
    transitions = []
    if not encoding:
        return transitions

    n = len(encoding)
    i = 0
    while i < n:
        if encoding.startswith(TRANSITION_DELIMITER, i):
            i += 2
            continue
        if encoding[i] != ZERO_BIT:
            i += 1
            continue

        fields = []
        while True:
            run = decode_unary_run(encoding, i)
            if run == 0:
                break
            fields.append(run)
            i += run
            if len(fields) == FIELDS_PER_TRANSITION:
                break
            if i < n and encoding[i] == SEPARATOR_BIT:
                i += 1
            else:
                break

        if len(fields) == FIELDS_PER_TRANSITION:
            from_state, read_symbol, to_state, write_symbol, direction = fields
            transitions.append(Transition(from_state, read_symbol, to_state, write_symbol,
                                          direction_from_code(direction)))

    return transitions


def decode_lenient(encoding) -> MachineDefinition:
    """Build a machine from whatever extract_transitions finds. Still raises NoTransitionsError on nothing."""
    transitions = extract_transitions(encoding)
    if not transitions:
        raise NoTransitionsError()
    return MachineDefinition(transitions)
