import random

from emulator.codec import SYMBOL_BLANK, Alphabet
from emulator.tape import Tape


def test_tape_from_input():
    tape = Tape.from_input("0110", Alphabet())
    assert tape.head == 0
    assert tape.read() == 1
    assert dict(tape.cells) == {0: 1, 1: 2, 2: 2, 3: 1}
    assert tape.window(2, 4) == [SYMBOL_BLANK, SYMBOL_BLANK, 1, 2, 2, 1, SYMBOL_BLANK]


def test_empty_input_reads_blank():
    tape = Tape.from_input("", Alphabet())
    assert tape.read() == SYMBOL_BLANK
    assert len(tape) == 0
    assert tape.content() == []


def test_moves_never_allocate():
    tape = Tape()
    for _ in range(1000):
        tape.move_left()
    assert tape.head == -1000
    assert tape.read() == SYMBOL_BLANK
    for _ in range(3000):
        tape.move_right()
    assert tape.read() == SYMBOL_BLANK
    assert len(tape) == 0


def test_storage_counts_distinct_written_positions():
    rng = random.Random(7)
    tape = Tape()
    written = set()
    for _ in range(500):
        op = rng.choice(["left", "right", "write"])
        if op == "left":
            tape.move_left()
        elif op == "right":
            tape.move_right()
        else:
            tape.write(rng.choice([1, 2, SYMBOL_BLANK]))
            written.add(tape.head)
        assert len(tape) == len(written)


def test_clone_is_independent():
    tape = Tape.from_input("01", Alphabet())
    copy = tape.clone()
    copy.write(2)
    copy.move_right()
    copy.write(1)
    assert tape.read() == 1
    assert tape.head == 0
    assert dict(tape.cells) == {0: 1, 1: 2}
    assert copy.head == 1
    assert copy != tape


def test_content_trims_blank_edges():
    tape = Tape()
    tape.move_left()
    tape.write(SYMBOL_BLANK)
    tape.move_right()
    tape.write(2)
    tape.move_right()
    tape.move_right()
    tape.write(1)
    assert tape.content() == [2, SYMBOL_BLANK, 1]
    assert tape.min_position() == -1
    assert tape.max_position() == 2
