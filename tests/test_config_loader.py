import json

import pytest

from config.config_loader import CONFIG_PATH, DEFAULT_CONFIG, load_config, save_config, validate_config


def write_config(path, overrides):
    path.write_text(json.dumps(overrides), encoding="utf-8")
    return path


def test_shipped_config_is_valid(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = load_config(CONFIG_PATH)
    assert config["step_limit"] == 1_000_000
    assert set(config["examples"]) == {"T1", "T2"}
    assert (tmp_path / "logs").is_dir()


def test_overrides_merge_with_defaults(tmp_path):
    out_dir = tmp_path / "out"
    path = write_config(tmp_path / "runtime_config.json", {"step_limit": 500, "output_directory": str(out_dir)})
    config = load_config(path)
    assert config["step_limit"] == 500
    assert config["tape_window"] == DEFAULT_CONFIG["tape_window"]
    assert out_dir.is_dir()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "nope.json")


def test_wrong_type(tmp_path):
    path = write_config(tmp_path / "c.json", {"step_limit": "many", "output_directory": str(tmp_path)})
    with pytest.raises(TypeError):
        load_config(path)


def test_bool_is_not_a_counter():
    config = dict(DEFAULT_CONFIG, step_limit=True)
    with pytest.raises(TypeError):
        validate_config(config)


def test_missing_key_and_bad_values():
    config = dict(DEFAULT_CONFIG)
    del config["tape_window"]
    with pytest.raises(ValueError):
        validate_config(config)

    with pytest.raises(ValueError):
        validate_config(dict(DEFAULT_CONFIG, step_limit=0))
    with pytest.raises(ValueError):
        validate_config(dict(DEFAULT_CONFIG, tape_window=-1))
    with pytest.raises(TypeError):
        validate_config(dict(DEFAULT_CONFIG, examples={"T3": 101}))


def test_save_and_reload(tmp_path):
    path = tmp_path / "runtime_config.json"
    config = dict(DEFAULT_CONFIG, output_directory=str(tmp_path / "logs"), tape_window=4)
    save_config(config, path)
    assert load_config(path)["tape_window"] == 4
