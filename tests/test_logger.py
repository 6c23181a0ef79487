import json

from logger.logger import JSONLogger


def read_lines(path):
    with open(path, "r", encoding="utf-8") as f:
        return [json.loads(line) for line in f]


def test_log_appends_stamped_entries(tmp_path):
    logger = JSONLogger(str(tmp_path / "logs"), "utm_")
    logger.log({"event": "run", "steps_executed": 3})
    logger.log_batch([{"event": "run", "steps_executed": 1}, {"event": "run", "steps_executed": 2}])

    entries = read_lines(logger.current_log)
    assert [e["steps_executed"] for e in entries] == [3, 1, 2]
    assert all("timestamp" in e for e in entries)
    assert logger.current_log.endswith(f"utm_{logger.today}.jsonl")


def test_split_logs(tmp_path):
    logger = JSONLogger.from_config({"output_directory": str(tmp_path), "log_file_prefix": "x_"})
    logger.log_accepted([{"input": "00"}])
    logger.log_rejected([{"input": "1"}, {"input": "11"}])
    logger.log_trace("abcdef0123456789", [{"step_count": 1}])

    assert read_lines(tmp_path / f"accepted_{logger.today}.jsonl") == [{"input": "00"}]
    assert len(read_lines(tmp_path / f"rejected_{logger.today}.jsonl")) == 2
    assert read_lines(tmp_path / f"trace_abcdef012345_{logger.today}.jsonl") == [{"step_count": 1}]
