"""Tests for BoardConfig loading."""
import pytest

from projectboard.config import BoardConfig, ConfigError


def test_defaults_when_no_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = BoardConfig.load()
    assert cfg.port == 3000
    assert cfg.host == "127.0.0.1"
    assert (cfg.description_min_length, cfg.description_max_length) == (5, 99)
    assert (cfg.people_min, cfg.people_max) == (1, 5)


def test_yaml_values_and_unknown_keys(tmp_path):
    path = tmp_path / "board.yaml"
    path.write_text("port: 8080\npeople_max: 9\nflavour: mint\n")

    cfg = BoardConfig.load(str(path))

    assert cfg.port == 8080
    assert cfg.people_max == 9
    assert not hasattr(cfg, "flavour")


def test_config_path_from_env(tmp_path, monkeypatch):
    path = tmp_path / "board.yaml"
    path.write_text("host: 0.0.0.0\n")
    monkeypatch.setenv("PROJECTBOARD_CONFIG", str(path))

    assert BoardConfig.load().host == "0.0.0.0"


def test_env_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "board.yaml"
    path.write_text("port: 8080\napi_secret: from-file\n")
    monkeypatch.setenv("PROJECTBOARD_PORT", "9090")
    monkeypatch.setenv("PROJECTBOARD_API_SECRET", "from-env")

    cfg = BoardConfig.load(str(path))

    assert cfg.port == 9090
    assert cfg.api_secret == "from-env"


def test_bad_port_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("PROJECTBOARD_PORT", "http")
    with pytest.raises(ConfigError):
        BoardConfig.load()


@pytest.mark.parametrize("text", ["port: [unclosed\n", "- just\n- a list\n"])
def test_unreadable_yaml_falls_back_to_defaults(tmp_path, text):
    path = tmp_path / "board.yaml"
    path.write_text(text)
    assert BoardConfig.load(str(path)) == BoardConfig()


@pytest.mark.parametrize("text", [
    "description_min_length: 50\ndescription_max_length: 10\n",
    "people_min: 0\n",
    "people_min: 6\npeople_max: 5\n",
    "log_level: LOUD\n",
    "people_max: five\n",
    "log_level: 10\n",
    "port: [80, 81]\n",
    "host:\n",
    "people_max: true\n",
])
def test_invalid_bounds_raise(tmp_path, text):
    path = tmp_path / "board.yaml"
    path.write_text(text)
    with pytest.raises(ConfigError):
        BoardConfig.load(str(path))


def test_numeric_strings_are_coerced(tmp_path):
    path = tmp_path / "board.yaml"
    path.write_text("port: '8080'\npeople_max: '7'\n")

    cfg = BoardConfig.load(str(path))

    assert cfg.port == 8080
    assert cfg.people_max == 7
