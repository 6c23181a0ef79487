from emulator.codec import (
    SYMBOL_BLANK,
    Alphabet,
    Direction,
    Transition,
    decode_unary_run,
    direction_code,
    direction_from_code,
    encode_transition,
    encode_transitions,
    state_label,
    symbol_char,
    unary,
)


def test_unary_runs():
    assert unary(0) == ""
    assert unary(3) == "000"
    assert decode_unary_run("0001", 0) == 3
    assert decode_unary_run("0001", 1) == 2
    assert decode_unary_run("0001", 3) == 0
    assert decode_unary_run("0001", 10) == 0


def test_default_symbol_and_state_labels():
    assert [symbol_char(n) for n in (1, 2, 3, 4, 29)] == ["0", "1", "_", "A", "Z"]
    assert symbol_char(30) == "X30"
    assert symbol_char(1000) == "X1000"
    assert state_label(1) == "q1"
    assert state_label(57) == "q57"


def test_direction_codes():
    assert direction_from_code(1) is Direction.LEFT
    assert direction_from_code(2) is Direction.RIGHT
    assert direction_from_code(7) is Direction.RIGHT
    assert direction_code(Direction.LEFT) == 1
    assert direction_code(Direction.RIGHT) == 2


def test_alphabet_assigns_new_symbols_on_first_use():
    alphabet = Alphabet()
    assert alphabet.symbols_for("01_A") == [1, 2, SYMBOL_BLANK, 4]

    first = alphabet.symbol_for("#")
    assert first == 30
    assert alphabet.symbol_for("#") == first
    assert alphabet.symbol_for("$") == 31
    assert alphabet.char_for(first) == "#"
    # Unregistered symbols still render
    assert alphabet.char_for(99) == "X99"
    assert alphabet.render([2, 1, 3]) == "10_"


def test_encode_transition_layout():
    t = Transition(1, 1, 2, 2, Direction.LEFT)
    assert encode_transition(t) == "01010010010"

    u = Transition(3, 2, 1, 1, Direction.RIGHT)
    assert encode_transitions([t, u]) == "01010010010" + "11" + "00010010101001"
    assert encode_transitions([t, u], delimiter=False) == "01010010010" + "1" + "00010010101001"


def test_transition_str():
    t = Transition(1, 1, 2, 2, Direction.LEFT)
    assert str(t) == "δ(q1, 0) = (q2, 1, L)"
    assert t.key == (1, 1)
