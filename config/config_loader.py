import json
import os
from datetime import datetime
from pathlib import Path

CONFIG_PATH = Path(__file__).parent / "runtime_config.json"

DEFAULT_CONFIG = {
    "step_limit": 1_000_000,
    "tape_window": 15,
    "progress_interval": 1000,
    "log_runs": True,
    "log_steps": False,
    "output_directory": "logs/",
    "log_file_prefix": "utm_",
    "search_paths": ["", "resources/", "src/resources/"],
    "examples": {
        "T1": "010010001010011000101010010110001001001010011000100010001010",
        "T2": "1010010100100110101000101001100010010100100110001010010100"
    }
}

# Expected types for validation
CONFIG_SCHEMA = {
    "step_limit": int,
    "tape_window": int,
    "progress_interval": int,
    "log_runs": bool,
    "log_steps": bool,
    "output_directory": str,
    "log_file_prefix": str,
    "search_paths": list,
    "examples": dict
}

POSITIVE_KEYS = ["step_limit", "progress_interval"]


def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        value = config[key]
        # bool is an int subclass; keep counters and flags apart
        if not isinstance(value, expected_type) or (expected_type is int and isinstance(value, bool)):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(value)}.")

    for key in POSITIVE_KEYS:
        if config[key] <= 0:
            raise ValueError(f"Config key '{key}' must be positive, got {config[key]}.")
    if config["tape_window"] < 0:
        raise ValueError(f"Config key 'tape_window' must not be negative, got {config['tape_window']}.")

    for name, encoding in config["examples"].items():
        if not isinstance(encoding, str):
            raise TypeError(f"Example '{name}' must be a binary string, got {type(encoding)}.")


def load_config(path=CONFIG_PATH, verbose=False):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    validate_config(config)

    os.makedirs(config["output_directory"], exist_ok=True)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config


def save_config(config, path=CONFIG_PATH):
    validate_config(config)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
