# app.py

import argparse
import time

from rich.console import Console
from rich.prompt import Prompt, IntPrompt, Confirm

from config.config_loader import CONFIG_PATH, load_config, save_config
from emulator.codec import Alphabet
from emulator.decoder import DecodeError, decode, decode_lenient
from emulator.display import READING_LABELS, content_readings, machine_summary, render_snapshot, transition_grid
from emulator.engine import Engine
from emulator.sources import decimal_to_binary, decimal_to_unary, load_encoding
from logger.logger import JSONLogger

console = Console()

EXIT_ACCEPTED = 0
EXIT_ERROR = 1
EXIT_REJECTED = 2


class Session:
    """Machine and tape input currently loaded in the interactive menu."""

    def __init__(self, config, config_path=CONFIG_PATH):
        self.config = config
        self.config_path = config_path
        self.machine = None
        self.input = ""
        self.logger = JSONLogger.from_config(config) if config["log_runs"] else None

    def engine(self):
        return Engine(self.machine, Alphabet())


# === Utilities ===
def load_machine(encoding, lenient=False):
    machine = decode_lenient(encoding) if lenient else decode(encoding)
    console.print(f"[green]Decoded {len(machine)} transitions.[/green]")
    return machine


def run_summary(engine, result, text, elapsed_ms):
    final = result.configuration
    return {
        "event": "run",
        "machine_id": engine.machine.machine_id(),
        "input": text,
        "steps_executed": result.steps_executed,
        "limit_reached": result.limit_reached,
        "accepted": not result.limit_reached and engine.is_accepting(final),
        "final_state": final.state_label,
        "tape": engine.alphabet.render(final.tape.content()),
        "readings": content_readings(final.tape.content(), final.tape.blank),
        "elapsed_ms": round(elapsed_ms, 3),
    }


def print_final_result(engine, final, limit_reached=False):
    console.print("\n[bold]FINAL RESULT:[/bold]")
    if limit_reached:
        console.print("[yellow]Execution terminated - step limit reached! The machine may be in an infinite loop.[/yellow]")
    elif engine.is_accepting(final):
        console.print("[bold green]The input was ACCEPTED.[/bold green]")
    else:
        console.print("[bold red]The input was REJECTED.[/bold red]")
    symbols = final.tape.content()
    content = engine.alphabet.render(symbols)
    console.print(f"Final tape content: {content or '(empty)'}")
    for key, value in content_readings(symbols, final.tape.blank).items():
        console.print(f"{READING_LABELS[key]}: {value}")
    console.print(f"Total steps executed: {final.step_count:,}")


# === Execution Modes ===
def execute_run(engine, text, config):
    """Run to halt or step limit, printing progress every progress_interval steps."""
    radius = config["tape_window"]
    interval = config["progress_interval"]
    trace = []

    def on_step(cfg):
        if cfg.step_count % interval == 0:
            console.print(f"[dim]Processed {cfg.step_count:,} steps...[/dim]")
        if config["log_steps"]:
            trace.append(engine.snapshot(cfg, radius).as_dict())

    initial = engine.initial_configuration(text)
    console.print(render_snapshot(engine.snapshot(initial, radius), title="Initial configuration"))

    start_time = time.perf_counter()
    result = engine.run(initial, config["step_limit"], on_step=on_step)
    elapsed_ms = (time.perf_counter() - start_time) * 1000

    if not result.limit_reached:
        console.print(f"\nExecution completed in {result.steps_executed:,} steps ({elapsed_ms:.1f}ms)!")
    console.print(render_snapshot(engine.snapshot(result.configuration, radius), title="Final configuration"))
    return result, elapsed_ms, trace


def execute_steps(engine, text, config):
    """Step mode: Enter advances one step, 'q' quits. Returns the last configuration and whether it finished."""
    radius = config["tape_window"]
    current = engine.initial_configuration(text)
    console.print(render_snapshot(engine.snapshot(current, radius), title="Initial configuration"))

    while current.step_count < config["step_limit"]:
        command = Prompt.ask("Press ENTER for next step or 'q' to quit", default="", show_default=False)
        if command.strip().lower() == "q":
            console.print("[yellow]Execution terminated by user.[/yellow]")
            return current, False

        successor = engine.step(current)
        if successor is None:
            console.print("[bold]Machine halted![/bold]")
            console.print(render_snapshot(engine.snapshot(current, radius), title="Final configuration"))
            return current, True

        current = successor
        console.print(render_snapshot(engine.snapshot(current, radius), title=f"After step {current.step_count}"))

    console.print("[yellow]Execution terminated - step limit reached![/yellow]")
    return current, False


# === Menu ===
def show_main_menu(session):
    console.print("\n[bold cyan]Universal Turing Machine Emulator[/bold cyan]")
    loaded = f"{len(session.machine)} transitions" if session.machine else "none"
    console.print(f"[dim]Machine: {loaded} | Input: '{session.input}'[/dim]")
    console.print("[1] Load Machine Encoding")
    console.print("[2] Set Tape Input")
    console.print("[3] Step Mode")
    console.print("[4] Run Mode")
    console.print("[5] Inspect Transition Table")
    console.print("[6] Edit Config")
    console.print("[7] Exit")


def prompt_encoding(config):
    """Ask for an encoding: direct binary, file, decimal number or a configured example."""
    examples = config["examples"]
    console.print("\n[bold]Select Turing Machine input method:[/bold]")
    console.print("[1] Enter binary encoding directly")
    console.print("[2] Load from file")
    console.print("[3] Decimal number (converted to binary)")
    for idx, (name, encoding) in enumerate(examples.items(), start=4):
        console.print(f"[{idx}] Use {name} ({encoding})")

    choices = [str(i) for i in range(1, 4 + len(examples))]
    choice = Prompt.ask("Enter your choice", choices=choices, default="1")

    if choice == "1":
        return Prompt.ask("Enter the binary encoding").strip()
    if choice == "2":
        while True:
            filename = Prompt.ask("Enter the file name or 'cancel'").strip()
            if filename.lower() == "cancel":
                return None
            try:
                path, encoding = load_encoding(filename, config["search_paths"])
            except FileNotFoundError as e:
                console.print(f"[red]{e}[/red]")
                continue
            console.print(f"[green]Successfully loaded encoding from: {path.resolve()}[/green]")
            return encoding
    if choice == "3":
        try:
            encoding = decimal_to_binary(Prompt.ask("Enter decimal number"))
        except ValueError:
            console.print("[red]Invalid decimal number.[/red]")
            return None
        console.print(f"Converted to binary: {encoding}")
        return encoding

    name = list(examples)[int(choice) - 4]
    console.print(f"Using {name}.")
    return examples[name]


def handle_load(session):
    encoding = prompt_encoding(session.config)
    if encoding is None:
        return
    try:
        machine = load_machine(encoding)
    except DecodeError as e:
        console.print(f"[red]Error: {e}[/red]")
        if not Confirm.ask("Try the lenient decoder instead?", default=False):
            return
        try:
            machine = load_machine(encoding, lenient=True)
        except DecodeError as e2:
            console.print(f"[red]Error: {e2}[/red]")
            return
    session.machine = machine


def handle_input(session):
    console.print("\n[bold]Select input format:[/bold]")
    console.print("[1] Raw tape input")
    console.print("[2] Decimal number (converted to unary)")
    choice = Prompt.ask("Enter your choice", choices=["1", "2"], default="1")
    text = Prompt.ask("Enter the input for the Turing machine", default="", show_default=False).strip()
    if choice == "2":
        try:
            text = decimal_to_unary(text)
        except ValueError:
            console.print("[red]Invalid decimal number. Using '0' instead.[/red]")
            text = "0"
        console.print(f"Converted to unary: '{text}'")
    session.input = text


def handle_step(session):
    if session.machine is None:
        console.print("[red]Load a machine first.[/red]")
        return
    engine = session.engine()
    final, finished = execute_steps(engine, session.input, session.config)
    if finished:
        print_final_result(engine, final)


def handle_run(session):
    if session.machine is None:
        console.print("[red]Load a machine first.[/red]")
        return
    engine = session.engine()
    console.print("\n[cyan]RUN MODE: Executing all steps automatically...[/cyan]")
    result, elapsed_ms, trace = execute_run(engine, session.input, session.config)
    print_final_result(engine, result.configuration, result.limit_reached)
    log_run(session.logger, engine, result, session.input, elapsed_ms, trace)


def handle_inspect(session):
    if session.machine is None:
        console.print("[red]Load a machine first.[/red]")
        return
    alphabet = Alphabet()
    console.print(machine_summary(session.machine, alphabet))
    console.print(transition_grid(session.machine, alphabet))


def handle_edit_config(session):
    console.print("\n[bold]Edit Configuration[/bold]")
    config = session.config

    step_limit = IntPrompt.ask("Step Limit", default=config.get("step_limit", 1000000))
    tape_window = IntPrompt.ask("Tape Window (cells each side of the head)", default=config.get("tape_window", 15))
    progress_interval = IntPrompt.ask("Progress Interval", default=config.get("progress_interval", 1000))
    log_runs = Confirm.ask("Log runs?", default=config.get("log_runs", True))
    log_steps = Confirm.ask("Log every step?", default=config.get("log_steps", False))

    config.update({
        "step_limit": step_limit,
        "tape_window": tape_window,
        "progress_interval": progress_interval,
        "log_runs": log_runs,
        "log_steps": log_steps
    })

    try:
        save_config(config, session.config_path)
    except (TypeError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        session.config = load_config(session.config_path)
        return
    session.logger = JSONLogger.from_config(config) if log_runs else None
    console.print("[green]Configuration updated successfully.[/green]")


def log_run(logger, engine, result, text, elapsed_ms, trace):
    if logger is None:
        return
    entry = run_summary(engine, result, text, elapsed_ms)
    logger.log(entry)
    if trace:
        logger.log_trace(entry["machine_id"], trace)


def interactive_main(config, config_path=CONFIG_PATH):
    session = Session(config, config_path)

    while True:
        show_main_menu(session)
        choice = Prompt.ask("\nChoose an option", choices=["1", "2", "3", "4", "5", "6", "7"], default="7")

        if choice == "1":
            handle_load(session)
        elif choice == "2":
            handle_input(session)
        elif choice == "3":
            handle_step(session)
        elif choice == "4":
            handle_run(session)
        elif choice == "5":
            handle_inspect(session)
        elif choice == "6":
            handle_edit_config(session)
        elif choice == "7":
            console.print("[bold green]Goodbye![/bold green]")
            break


# === CLI Mode for Automation ===
def resolve_encoding(args, config):
    if args.encoding:
        return args.encoding.strip()
    if args.file:
        path, encoding = load_encoding(args.file, config["search_paths"])
        console.print(f"[dim]Loaded encoding from {path.resolve()}[/dim]")
        return encoding
    if args.decimal:
        return decimal_to_binary(args.decimal)
    if args.example not in config["examples"]:
        raise ValueError(f"Example {args.example} not found in config. Known: {', '.join(config['examples'])}")
    return config["examples"][args.example]


def cli_main(args, config):
    if args.step_limit is not None:
        config["step_limit"] = args.step_limit

    try:
        machine = load_machine(resolve_encoding(args, config), lenient=args.lenient)
        text = decimal_to_unary(args.unary) if args.unary is not None else args.input
    except (DecodeError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return EXIT_ERROR

    engine = Engine(machine, Alphabet())
    result, elapsed_ms, trace = execute_run(engine, text, config)
    print_final_result(engine, result.configuration, result.limit_reached)

    if config["log_runs"]:
        log_run(JSONLogger.from_config(config), engine, result, text, elapsed_ms, trace)

    accepted = not result.limit_reached and engine.is_accepting(result.configuration)
    return EXIT_ACCEPTED if accepted else EXIT_REJECTED


def main():
    parser = argparse.ArgumentParser(description="Universal Turing Machine Emulator")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--encoding", help="Binary encoding of the machine")
    source.add_argument("--file", help="File whose first line is the binary encoding")
    source.add_argument("--decimal", help="Decimal number converted to the binary encoding")
    source.add_argument("--example", help="Name of an example encoding from the config, e.g., T1")
    parser.add_argument("--input", default="", help="Tape input (default: empty tape)")
    parser.add_argument("--unary", help="Decimal number converted to a unary tape input")
    parser.add_argument("--step-limit", type=int, help="Override the configured step limit")
    parser.add_argument("--lenient", action="store_true", help="Use the non-validating best-effort decoder")
    parser.add_argument("--config", default=str(CONFIG_PATH), help="Path to runtime_config.json")
    args = parser.parse_args()

    config = load_config(args.config)

    if args.encoding or args.file or args.decimal or args.example:
        raise SystemExit(cli_main(args, config))
    interactive_main(config, args.config)


if __name__ == "__main__":
    main()
