# tools/run_inputs.py

import argparse
import json
from itertools import product
from pathlib import Path

import numpy as np
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from config.config_loader import load_config
from emulator.decoder import DecodeError, decode
from emulator.engine import DEFAULT_STEP_LIMIT, Engine
from emulator.sources import load_encoding
from logger.logger import JSONLogger

console = Console()


# === Input Sources ===
def binary_strings(max_length, min_length=0):
    """All strings over {0, 1} ordered by length, then lexicographically."""
    for length in range(min_length, max_length + 1):
        for bits in product("01", repeat=length):
            yield "".join(bits)


def load_input_pool(input_file):
    """One input per line. A line holding only '-' stands for the empty input."""
    with open(input_file, "r", encoding="utf-8") as f:
        inputs = [line.strip() for line in f if line.strip()]
    return ["" if text == "-" else text for text in inputs]


# === Checkpointing ===
def load_checkpoint(checkpoint_path):
    if checkpoint_path.exists():
        with open(checkpoint_path, "r", encoding="utf-8") as f:
            checkpoint = json.load(f)
        return checkpoint.get("completed", [])
    return []


def save_checkpoint(completed, checkpoint_path):
    with open(checkpoint_path, "w", encoding="utf-8") as f:
        json.dump({"completed": completed}, f, indent=4)


# === Single Input ===
def run_single(engine, text, step_limit=DEFAULT_STEP_LIMIT):
    result = engine.run(engine.initial_configuration(text), step_limit)
    final = result.configuration
    halted = not result.limit_reached
    return {
        "input": text,
        "steps_taken": result.steps_executed,
        "halted": halted,
        "accepted": halted and engine.is_accepting(final),
        "final_state": final.state_label,
        "tape": engine.alphabet.render(final.tape.content()),
    }


def summarize(results):
    """Step statistics over a list of result entries."""
    if not results:
        return {"runs": 0, "accepted": 0, "rejected": 0, "unfinished": 0,
                "mean_steps": 0.0, "median_steps": 0.0, "max_steps": 0}
    steps = np.array([entry["steps_taken"] for entry in results], dtype=np.int64)
    accepted = np.array([entry["accepted"] for entry in results], dtype=bool)
    halted = np.array([entry["halted"] for entry in results], dtype=bool)
    return {
        "runs": len(results),
        "accepted": int(accepted.sum()),
        "rejected": int((halted & ~accepted).sum()),
        "unfinished": int((~halted).sum()),
        "mean_steps": float(steps.mean()),
        "median_steps": float(np.median(steps)),
        "max_steps": int(steps.max()),
    }


def print_summary(summary):
    table = Table(title="Run Summary", show_header=True, header_style="bold magenta")
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    for key, value in summary.items():
        table.add_row(key, f"{value:,.2f}" if isinstance(value, float) else f"{value:,}")
    console.print(table)


# === Main Runner ===
def run_inputs(encoding, inputs, output_name="results", results_root="results", batch_size=256,
               step_limit=DEFAULT_STEP_LIMIT, logger=None):
    machine = decode(encoding)
    engine = Engine(machine)
    machine_id = machine.machine_id()

    results_folder = Path(results_root) / machine_id[:12]
    results_folder.mkdir(parents=True, exist_ok=True)
    results_file = results_folder / f"{output_name}.jsonl"
    checkpoint_file = results_folder / f"{output_name}_checkpoint.json"

    all_inputs = list(inputs)
    completed = load_checkpoint(checkpoint_file)
    done = set(completed)
    pending_inputs = [text for text in all_inputs if text not in done]
    console.print(f"[cyan]Loaded {len(all_inputs):,} inputs. {len(pending_inputs):,} pending.[/cyan]")

    all_results = []
    with open(results_file, "a", encoding="utf-8") as results_fh:
        for batch_start in range(0, len(pending_inputs), batch_size):
            batch = pending_inputs[batch_start:batch_start + batch_size]

            with Progress(
                    SpinnerColumn(),
                    BarColumn(),
                    "[progress.percentage]{task.percentage:>3.0f}%",
                    TextColumn("{task.completed}/{task.total} Inputs"),
                    TimeElapsedColumn(),
                    console=console,
                    transient=True
            ) as progress:
                task = progress.add_task("[cyan]Running...", total=len(batch))

                batch_results = []
                for text in batch:
                    entry = {"machine_id": machine_id, **run_single(engine, text, step_limit)}
                    batch_results.append(entry)
                    completed.append(text)
                    progress.update(task, advance=1)

            # === BULK WRITE once per batch ===
            for entry in batch_results:
                results_fh.write(json.dumps(entry) + "\n")
            results_fh.flush()

            if logger is not None:
                logger.log_accepted([e for e in batch_results if e["accepted"]])
                logger.log_rejected([e for e in batch_results if not e["accepted"]])

            save_checkpoint(completed, checkpoint_file)
            all_results.extend(batch_results)
            console.print(f"[INFO] Batch {batch_start // batch_size + 1} completed. Checkpoint saved.")

    summary = summarize(all_results)
    if logger is not None:
        logger.log({"machine_id": machine_id, "event": "batch_run", **summary})
    return all_results, summary


# === CLI ===
def resolve_encoding(args, config):
    if args.file:
        _, encoding = load_encoding(args.file, config["search_paths"])
        return encoding
    if args.example:
        if args.example not in config["examples"]:
            raise ValueError(f"Example {args.example} not found in config. Known: {', '.join(config['examples'])}")
        return config["examples"][args.example]
    return args.encoding.strip()


def main():
    parser = argparse.ArgumentParser(description="Run one Turing machine over many inputs with checkpointing.")
    group = parser.add_mutually_exclusive_group(required=True)
    group.add_argument("--encoding", help="Binary encoding of the machine")
    group.add_argument("--file", help="File whose first line is the binary encoding")
    group.add_argument("--example", help="Name of an example encoding from the config, e.g., T2")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--inputs", help="Path to an input pool file (one input per line)")
    source.add_argument("--max_length", type=int, help="Run every binary string up to this length")
    parser.add_argument("--output", default="results", help="Output result file name (default: results)")
    parser.add_argument("--batch_size", type=int, default=256, help="Inputs per save/checkpoint")
    parser.add_argument("--step_limit", type=int, help="Maximum steps per input (default: from config)")
    args = parser.parse_args()

    config = load_config()
    try:
        encoding = resolve_encoding(args, config)
        decode(encoding)
    except (DecodeError, FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise SystemExit(1)

    inputs = load_input_pool(args.inputs) if args.inputs else binary_strings(args.max_length)
    logger = JSONLogger.from_config(config) if config["log_runs"] else None

    _, summary = run_inputs(
        encoding,
        inputs,
        output_name=args.output,
        batch_size=args.batch_size,
        step_limit=args.step_limit or config["step_limit"],
        logger=logger
    )
    print_summary(summary)
    console.print("[green][SUCCESS] All inputs processed. Results saved.[/green]")


if __name__ == "__main__":
    main()
