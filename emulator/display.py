from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from emulator.codec import BLANK_CHAR, SYMBOL_BLANK, SYMBOL_ONE, SYMBOL_ZERO, state_label

READING_LABELS = {
    "binary_value": "Binary-to-decimal value",
    "unary_zeros": "Unary decimal value (count of zeros)",
    "unary_ones": "Unary decimal value (count of ones)",
    "ones_count": "Total count of all ones",
}


def render_tape(snapshot):
    """Tape window with the scanned cell highlighted, and a caret line under it."""
    tape = Text()
    for i, char in enumerate(snapshot.window):
        if i == snapshot.radius:
            tape.append(f"[{char}]", style="bold reverse")
        elif char == BLANK_CHAR:
            tape.append(char, style="grey58")
        else:
            tape.append(char)
    pointer = Text(" " * (sum(len(c) for c in snapshot.window[:snapshot.radius]) + 1) + "^", style="cyan")
    return tape, pointer


def render_snapshot(snapshot, title="Computation State"):
    state = Text(snapshot.state, style="bold cyan")
    if snapshot.halted:
        if snapshot.accepted:
            state.append("  ACCEPTED", style="bold green")
        else:
            state.append("  REJECTED", style="bold red")

    tape, pointer = render_tape(snapshot)

    grid = Table.grid(padding=(0, 1))
    grid.add_column(style="bold")
    grid.add_column()
    grid.add_row("Current state:", state)
    grid.add_row("Step count:", str(snapshot.step_count))
    grid.add_row("Head position:", str(snapshot.head_position))
    grid.add_row("Tape:", tape)
    grid.add_row("", pointer)
    grid.add_row("Configuration:", snapshot.configuration)
    return Panel(grid, title=title, expand=False)


def transition_grid(machine, alphabet):
    """State x symbol table of the machine. Missing entries show HALT."""
    symbols = sorted(machine.tape_alphabet)
    table = Table(title="Transition Table", show_header=True, header_style="bold magenta")
    table.add_column("State", justify="center")
    for symbol in symbols:
        table.add_column(alphabet.char_for(symbol), justify="center")

    for state in sorted(machine.states):
        label = state_label(state)
        if machine.is_accept_state(state):
            label += " (accept)"
        elif state == machine.start_state:
            label += " (start)"
        row = [label]
        for symbol in symbols:
            t = machine.transition(state, symbol)
            if t is None:
                row.append("[grey58]HALT[/grey58]")
            else:
                row.append(f"{alphabet.char_for(t.write_symbol)}{t.direction.value}{state_label(t.to_state)}")
        table.add_row(*row)
    return table


def machine_summary(machine, alphabet):
    def symbols(values):
        return "{" + ", ".join(alphabet.char_for(s) for s in sorted(values)) + "}"

    grid = Table.grid(padding=(0, 1))
    grid.add_column(style="bold")
    grid.add_column()
    grid.add_row("States:", "{" + ", ".join(state_label(s) for s in sorted(machine.states)) + "}")
    grid.add_row("Input alphabet:", symbols(machine.input_alphabet))
    grid.add_row("Tape alphabet:", symbols(machine.tape_alphabet))
    grid.add_row("Start state:", state_label(machine.start_state))
    grid.add_row("Accept states:", "{" + ", ".join(state_label(s) for s in sorted(machine.accept_states)) + "}")
    grid.add_row("Blank symbol:", alphabet.char_for(machine.blank_symbol))
    grid.add_row("Transitions:", str(len(machine)))
    return Panel(grid, title="Turing Machine", expand=False)


# === FINAL TAPE READINGS ===
def content_readings(symbols, blank=SYMBOL_BLANK):
    """
    Numeric readings of the trimmed tape content (Tape.content()).

    binary_value  the content read as a binary number, when it holds only 0s and 1s
    unary_zeros   number of marks, when every non-blank cell is 0
    unary_ones    number of marks, when every non-blank cell is 1
    ones_count    number of 1s, when there are 1s mixed with other symbols
    """
    readings = {}
    if symbols and all(s in (SYMBOL_ZERO, SYMBOL_ONE) for s in symbols):
        readings["binary_value"] = int("".join("1" if s == SYMBOL_ONE else "0" for s in symbols), 2)

    marks = [s for s in symbols if s != blank]
    if marks and all(s == SYMBOL_ZERO for s in marks):
        readings["unary_zeros"] = len(marks)
    if marks and all(s == SYMBOL_ONE for s in marks):
        readings["unary_ones"] = len(marks)
    elif SYMBOL_ONE in marks:
        readings["ones_count"] = marks.count(SYMBOL_ONE)
    return readings
