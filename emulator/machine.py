import hashlib
from types import MappingProxyType

from emulator.codec import (
    ACCEPT_STATE,
    START_STATE,
    SYMBOL_BLANK,
    SYMBOL_ONE,
    SYMBOL_ZERO,
    encode_transitions,
)


class MachineDefinition:
    """Decoded transition table of a single-tape deterministic machine. Immutable after construction."""

    __slots__ = ("_table", "states", "input_alphabet", "tape_alphabet")

    start_state = START_STATE
    accept_states = frozenset({ACCEPT_STATE})
    blank_symbol = SYMBOL_BLANK

    def __init__(self, transitions):
        table = {}
        states = {START_STATE, ACCEPT_STATE}
        input_alphabet = {SYMBOL_ZERO, SYMBOL_ONE}
        tape_alphabet = {SYMBOL_ZERO, SYMBOL_ONE, SYMBOL_BLANK}

        for t in transitions:
            # Later duplicates overwrite earlier ones
            table[t.key] = t
            states.update((t.from_state, t.to_state))
            if t.read_symbol <= SYMBOL_ONE:
                input_alphabet.add(t.read_symbol)
            tape_alphabet.update((t.read_symbol, t.write_symbol))

        self._table = MappingProxyType(table)
        self.states = frozenset(states)
        self.input_alphabet = frozenset(input_alphabet)
        self.tape_alphabet = frozenset(tape_alphabet)

    @property
    def table(self):
        return self._table

    def transition(self, state, symbol):
        """Return the transition for (state, symbol), or None when the machine halts there."""
        return self._table.get((state, symbol))

    def transitions(self):
        """Transitions in (from_state, read_symbol) order."""
        return [self._table[key] for key in sorted(self._table)]

    def is_accept_state(self, state):
        return state in self.accept_states

    def encode(self):
        return encode_transitions(self.transitions())

    def machine_id(self):
        """Deterministic id for a transition table, independent of input order."""
        return hashlib.sha256(self.encode().encode("utf-8")).hexdigest()

    def __len__(self):
        return len(self._table)

    def __eq__(self, other):
        if not isinstance(other, MachineDefinition):
            return NotImplemented
        return dict(self._table) == dict(other._table)

    def __hash__(self):
        return hash(frozenset(self._table.items()))

    def __repr__(self):
        return f"MachineDefinition({len(self)} transitions, states={sorted(self.states)})"
