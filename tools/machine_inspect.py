import argparse

from rich.console import Console

from config.config_loader import load_config
from emulator.codec import Alphabet, state_label
from emulator.decoder import DecodeError, decode
from emulator.display import machine_summary, transition_grid
from emulator.sources import load_encoding

console = Console()


def latex_table(machine, alphabet):
    """Transition table as a LaTeX array, one row per state."""
    symbols = sorted(machine.tape_alphabet)
    lines = [r"\begin{array}{c|" + "c" * len(symbols) + "}"]
    lines.append("State/Symbol & " + " & ".join(f"\\text{{{alphabet.char_for(s)}}}" for s in symbols) + r" \\ \hline")
    for state in sorted(machine.states):
        row = [f"q_{{{state}}}"]
        for symbol in symbols:
            t = machine.transition(state, symbol)
            if t is None:
                row.append(r"\text{HALT}")
            else:
                row.append(f"({state_label(t.to_state)}, {alphabet.char_for(t.write_symbol)}, {t.direction.value})")
        lines.append(" & ".join(row) + r" \\")
    lines.append(r"\end{array}")
    return "\n".join(lines)


def inspect_machine(encoding, latex=False):
    machine = decode(encoding)
    alphabet = Alphabet()

    console.print(machine_summary(machine, alphabet))
    console.print(transition_grid(machine, alphabet))
    console.print("\n[bold]Transitions[/bold]")
    for t in machine.transitions():
        console.print(f"  {t}")

    if latex:
        console.print("\n=== LaTeX Table ===")
        console.print(latex_table(machine, alphabet), markup=False, highlight=False)
    console.print(f"\n[dim]Machine ID: {machine.machine_id()}[/dim]")
    return machine


def main():
    parser = argparse.ArgumentParser(description="Universal TM Machine Inspector")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--encoding", help="Binary encoding of the machine")
    group.add_argument("--file", help="File whose first line is the binary encoding")
    group.add_argument("--example", help="Name of an example encoding from the config, e.g., T1")
    parser.add_argument("--latex", action="store_true", help="Also print a LaTeX array")
    args = parser.parse_args()

    config = load_config()
    try:
        if args.file:
            path, encoding = load_encoding(args.file, config["search_paths"])
            console.print(f"[INFO] Loaded encoding from {path.resolve()}")
        elif args.example:
            if args.example not in config["examples"]:
                raise ValueError(f"Example {args.example} not found in config. Known: {', '.join(config['examples'])}")
            encoding = config["examples"][args.example]
        else:
            encoding = args.encoding.strip()
        inspect_machine(encoding, latex=args.latex)
    except (DecodeError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
