"""Unit tests for configuration loading"""

import pytest

from moodmirror.config.config_loader import CONFIG_DIR, Config, config


def write_config(tmp_path, text, name="config.yaml"):
    path = tmp_path / name
    path.write_text(text)
    return path


def test_global_config_uses_test_environment():
    assert config.config_path.name == "config.test.yaml"
    assert config.get('detector.simulated_latency') == 0.0


def test_default_configs_ship_inside_package(monkeypatch):
    monkeypatch.delenv('MOODMIRROR_CONFIG_DIR', raising=False)
    monkeypatch.setenv('MOODMIRROR_ENV', 'production')

    cfg = Config()

    assert cfg.config_path == CONFIG_DIR / "config.yaml"
    assert CONFIG_DIR.name == "config"
    assert (CONFIG_DIR / "config_loader.py").exists()
    assert cfg.get('api.max_tracked_users') == 10000


def test_dot_notation_and_defaults(tmp_path):
    cfg = Config(str(write_config(tmp_path, "detector:\n  sensitivity: 0.4\n")))

    assert cfg.get('detector.sensitivity') == 0.4
    assert cfg['detector.sensitivity'] == 0.4
    assert cfg.get('detector.language', 'en') == 'en'
    assert cfg.get('detector.sensitivity.deeper', 'x') == 'x'


def test_empty_file(tmp_path):
    cfg = Config(str(write_config(tmp_path, "")))
    assert cfg.get('api.port', 8000) == 8000


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config(str(tmp_path / "nope.yaml"))


def test_environment_specific_file(tmp_path, monkeypatch):
    write_config(tmp_path, "api:\n  port: 1\n")
    write_config(tmp_path, "api:\n  port: 2\n", name="config.staging.yaml")
    monkeypatch.setenv('MOODMIRROR_CONFIG_DIR', str(tmp_path))

    monkeypatch.setenv('MOODMIRROR_ENV', 'staging')
    assert Config().get('api.port') == 2

    monkeypatch.setenv('MOODMIRROR_ENV', 'production')
    assert Config().get('api.port') == 1


def test_shipped_configs_validate():
    config.validate()


@pytest.mark.parametrize("text", [
    "detector:\n  sensitivity: 1.5\n",
    "detector:\n  model: enormous\n",
    "detector:\n  simulated_latency: -1\n",
    "detector:\n  extractor: psychic\n",
    "history:\n  trend_threshold: 2\n",
])
def test_validate_rejects(tmp_path, text):
    cfg = Config(str(write_config(tmp_path, text)))
    with pytest.raises(ValueError):
        cfg.validate()
