from types import MappingProxyType

from emulator.codec import SYMBOL_BLANK


class Tape:
    """Sparse tape, unbounded in both directions. Positions never written read as blank."""

    __slots__ = ("_cells", "head", "blank")

    def __init__(self, symbols=(), blank=SYMBOL_BLANK, head=0):
        self._cells = {pos: symbol for pos, symbol in enumerate(symbols)}
        self.head = head
        self.blank = blank

    @classmethod
    def from_input(cls, text, alphabet, blank=SYMBOL_BLANK):
        return cls(alphabet.symbols_for(text), blank)

    @property
    def cells(self):
        return MappingProxyType(self._cells)

    def read(self):
        return self._cells.get(self.head, self.blank)

    def write(self, symbol):
        self._cells[self.head] = symbol

    def move_left(self):
        self.head -= 1

    def move_right(self):
        self.head += 1

    def window(self, before, after):
        """Symbols from head-before to head+after inclusive."""
        return [self._cells.get(pos, self.blank) for pos in range(self.head - before, self.head + after + 1)]

    def clone(self):
        copy = Tape(blank=self.blank, head=self.head)
        copy._cells = dict(self._cells)
        return copy

    def min_position(self):
        return min(self._cells, default=0)

    def max_position(self):
        return max(self._cells, default=0)

    def content(self):
        """Written symbols from the first to the last non-blank cell."""
        written = [pos for pos, symbol in self._cells.items() if symbol != self.blank]
        if not written:
            return []
        return [self._cells.get(pos, self.blank) for pos in range(min(written), max(written) + 1)]

    def __len__(self):
        return len(self._cells)

    def __eq__(self, other):
        if not isinstance(other, Tape):
            return NotImplemented
        return self.head == other.head and self.blank == other.blank and self._cells == other._cells

    def __repr__(self):
        return f"Tape(head={self.head}, cells={len(self._cells)})"
