import argparse
from pathlib import Path

from rich.console import Console

from emulator.codec import Alphabet, Direction, Transition
from emulator.machine import MachineDefinition
from emulator.sources import encoding_to_decimal

console = Console()


# === TRANSITION TEXT FORMAT ===
# One transition per line: <from> <read> <to> <write> <L|R>
# States are written q<n> or <n>, symbols as tape characters ('_' is blank).
# Text after '#' is a comment.

def parse_state(token):
    value = token[1:] if token[:1] in ("q", "Q") else token
    if not value.isdigit() or int(value) < 1:
        raise ValueError(f"Invalid state {token!r}: expected q<n> with n >= 1")
    return int(value)


def parse_direction(token):
    try:
        return Direction(token.upper())
    except ValueError:
        raise ValueError(f"Invalid direction {token!r}: expected L or R") from None


def parse_transition_line(line, alphabet):
    parts = line.split()
    if len(parts) != 5:
        raise ValueError(f"Expected 5 fields but found {len(parts)} in {line!r}")
    from_state, read, to_state, write, direction = parts
    return Transition(parse_state(from_state), alphabet.symbol_for(read), parse_state(to_state),
                      alphabet.symbol_for(write), parse_direction(direction))


def parse_transition_text(text, alphabet=None):
    if alphabet is None:
        alphabet = Alphabet()
    transitions = []
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        try:
            transitions.append(parse_transition_line(line, alphabet))
        except ValueError as e:
            raise ValueError(f"Line {lineno}: {e}") from e
    if not transitions:
        raise ValueError("No transitions found")
    return transitions


def encode_text(text):
    """Return (machine, binary encoding) for a transition list in text form."""
    machine = MachineDefinition(parse_transition_text(text))
    return machine, machine.encode()


def main():
    parser = argparse.ArgumentParser(description="Encode a transition list as a binary Turing machine description")
    parser.add_argument("source", help="Text file with one transition per line")
    parser.add_argument("--output", help="Write the binary encoding to this file")
    args = parser.parse_args()

    machine, encoding = encode_text(Path(args.source).read_text(encoding="utf-8"))

    console.print(f"[green]Encoded {len(machine)} transitions.[/green]")
    console.print(f"Binary:  {encoding}")
    console.print(f"Decimal: {encoding_to_decimal(encoding)}")
    console.print(f"Machine ID: {machine.machine_id()}")

    if args.output:
        Path(args.output).parent.mkdir(parents=True, exist_ok=True)
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(encoding + "\n")
        console.print(f"[green]Saved encoding to {args.output}[/green]")


if __name__ == "__main__":
    main()
