import json
import os
from datetime import datetime, timezone


class JSONLogger:
    def __init__(self, output_directory="logs/", log_file_prefix="utm_"):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    @classmethod
    def from_config(cls, config):
        return cls(config["output_directory"], config["log_file_prefix"])

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _log_to_file(self, filename, entries):
        path = os.path.join(self.output_directory, filename)
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def _stamp(self, entry):
        return {"timestamp": datetime.now(timezone.utc).isoformat(), **entry}

    def log(self, entry: dict):
        """Log a single run summary to the main log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(self._stamp(entry)) + "\n")

    def log_batch(self, entries: list):
        """Log a batch of run summaries to the main log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(self._stamp(entry)) + "\n")

    def log_trace(self, machine_id, entries: list):
        """Log per-step snapshots of one run."""
        filename = f"trace_{machine_id[:12]}_{self.today}.jsonl"
        self._log_to_file(filename, entries)

    def log_accepted(self, entries: list):
        """Log inputs the machine accepted."""
        filename = f"accepted_{self.today}.jsonl"
        self._log_to_file(filename, entries)

    def log_rejected(self, entries: list):
        """Log inputs the machine rejected or did not finish."""
        filename = f"rejected_{self.today}.jsonl"
        self._log_to_file(filename, entries)
