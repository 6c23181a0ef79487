import json
import sys

import pytest

from emulator.codec import Alphabet, Direction, Transition
from emulator.decoder import decode
from tools.encode_machine import encode_text, parse_transition_text
from tools import machine_inspect, run_inputs as run_inputs_tool
from tools.machine_inspect import inspect_machine, latex_table
from tools.run_inputs import binary_strings, load_input_pool, run_inputs, summarize
from logger.logger import JSONLogger

T1 = "010010001010011000101010010110001001001010011000100010001010"
T2 = "1010010100100110101000101001100010010100100110001010010100"

T2_TEXT = """
# accepts strings containing 00
q1 1 q1 1 R
q1 0 q3 0 R
q3 1 q1 1 R
3  0 2  0 R   # numeric state ids work too
"""


def test_encode_text_reproduces_t2():
    machine, encoding = encode_text(T2_TEXT)
    assert len(machine) == 4
    assert machine == decode(T2)
    assert decode(encoding) == machine


def test_parse_transition_text_errors():
    with pytest.raises(ValueError, match="Line 1"):
        parse_transition_text("q1 0 q2 1")
    with pytest.raises(ValueError, match="direction"):
        parse_transition_text("q1 0 q2 1 S")
    with pytest.raises(ValueError, match="state"):
        parse_transition_text("q0 0 q2 1 R")
    with pytest.raises(ValueError, match="No transitions"):
        parse_transition_text("# nothing here\n")


def test_parse_transition_text_registers_new_symbols():
    alphabet = Alphabet()
    transitions = parse_transition_text("q1 # q2 _ L", alphabet)
    assert transitions == [Transition(1, alphabet.symbol_for("#"), 2, 3, Direction.LEFT)]


def test_latex_table_for_t1():
    machine = decode(T1)
    latex = latex_table(machine, Alphabet())
    lines = latex.splitlines()
    assert lines[0] == r"\begin{array}{c|ccc}"
    assert lines[-1] == r"\end{array}"
    # Header plus one row per state
    assert len(lines) == 2 + 1 + len(machine.states)
    assert r"q_{1} & \text{HALT} & (q3, 0, R) & \text{HALT} \\" in lines


def test_inspect_machine_prints(capsys):
    machine = inspect_machine(T1, latex=True)
    assert len(machine) == 4
    out = capsys.readouterr().out
    assert "Transition Table" in out
    assert "begin{array}" in out


def test_binary_strings_order():
    assert list(binary_strings(2)) == ["", "0", "1", "00", "01", "10", "11"]
    assert len(list(binary_strings(4, min_length=4))) == 16


def test_load_input_pool(tmp_path):
    pool = tmp_path / "inputs.txt"
    pool.write_text("00\n\n101\n-\n", encoding="utf-8")
    assert load_input_pool(pool) == ["00", "101", ""]


def test_run_inputs_with_checkpoint(tmp_path):
    logger = JSONLogger(str(tmp_path / "logs"))
    results, summary = run_inputs(T2, binary_strings(3), results_root=tmp_path / "results",
                                  batch_size=5, step_limit=100, logger=logger)

    by_input = {entry["input"]: entry for entry in results}
    assert len(by_input) == 15
    assert by_input["00"]["accepted"]
    assert by_input["100"]["accepted"]
    assert not by_input["101"]["accepted"]
    assert not by_input[""]["accepted"]
    assert summary["runs"] == 15
    assert summary["accepted"] == sum(1 for e in results if e["accepted"])
    assert summary["unfinished"] == 0

    machine_id = decode(T2).machine_id()
    results_file = tmp_path / "results" / machine_id[:12] / "results.jsonl"
    with open(results_file, "r", encoding="utf-8") as f:
        assert len([json.loads(line) for line in f]) == 15

    # Everything is checkpointed, so a rerun has nothing left to do
    rerun, rerun_summary = run_inputs(T2, binary_strings(3), results_root=tmp_path / "results", step_limit=100)
    assert rerun == []
    assert rerun_summary["runs"] == 0


def test_summarize_counts_unfinished():
    results = [
        {"steps_taken": 2, "halted": True, "accepted": True},
        {"steps_taken": 4, "halted": True, "accepted": False},
        {"steps_taken": 100, "halted": False, "accepted": False},
    ]
    summary = summarize(results)
    assert summary["accepted"] == 1
    assert summary["rejected"] == 1
    assert summary["unfinished"] == 1
    assert summary["max_steps"] == 100
    assert summary["median_steps"] == 4.0


@pytest.mark.parametrize("tool", [run_inputs_tool, machine_inspect])
@pytest.mark.parametrize("argv, message", [
    (["--example", "T9"], "Example T9 not found"),
    (["--encoding", "0102"], "only 0s and 1s"),
    (["--file", "missing.txt"], "missing.txt"),
])
def test_tool_reports_bad_encoding_source(tool, argv, message, tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    extra = ["--max_length", "1"] if tool is run_inputs_tool else []
    monkeypatch.setattr(sys, "argv", ["tool.py", *argv, *extra])
    with pytest.raises(SystemExit) as excinfo:
        tool.main()
    assert excinfo.value.code == 1
    assert message in capsys.readouterr().out
