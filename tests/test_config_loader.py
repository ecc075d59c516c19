from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from matview.config import DEFAULT_PATH, MatviewConfig, dump_config, load_config
from matview.utils.config import flatten, get
from matview.utils.dict_merge import deep_update

REPO = Path(__file__).resolve().parents[1]


def test_defaults_without_file(tmp_path):
    cfg = load_config(tmp_path / "missing.yaml")
    assert cfg == MatviewConfig().model_dump()
    assert cfg["modes"]["eps"] == 0.0
    assert cfg["histogram"]["bins"] == 256
    assert cfg["logging"] == {"level": "WARNING", "format": "text"}


def test_file_then_overrides(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("modes: {eps: 1.5, circular: true}\nhistogram: {bins: 64}\n")
    cfg = load_config(path, overrides={"modes": {"eps": 3.0}})
    assert cfg["modes"]["eps"] == 3.0
    assert cfg["modes"]["circular"] is True
    assert cfg["histogram"]["bins"] == 64
    assert cfg["histogram"]["hi"] == 1.0


def test_environment_overrides_logging(tmp_path, monkeypatch):
    path = tmp_path / "cfg.yaml"
    path.write_text("logging: {level: INFO}\n")
    monkeypatch.setenv("MATVIEW_LOG_LEVEL", "debug")
    monkeypatch.setenv("MATVIEW_LOG_FORMAT", "json")
    cfg = load_config(path, overrides={"logging": {"level": "ERROR"}})
    assert cfg["logging"] == {"level": "DEBUG", "format": "json"}


def test_unknown_section_rejected(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("solver: {}\n")
    with pytest.raises(ValueError, match="solver"):
        load_config(path)
    with pytest.raises(ValueError, match="typo"):
        load_config(tmp_path / "missing.yaml", overrides={"typo": 1})


def test_non_mapping_yaml_rejected(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("- 1\n- 2\n")
    with pytest.raises(TypeError):
        load_config(path)


@pytest.mark.parametrize(
    "overrides",
    [
        {"modes": {"M": 0}},
        {"modes": {"mu": -1.0}},
        {"modes": {"ground_pdf": [1.0, -2.0]}},
        {"modes": {"ground_pdf": []}},
        {"modes": {"eps": float("inf")}},
        {"modes": {"threshold": 1}},
        {"histogram": {"lo": 1.0, "hi": 0.5}},
        {"histogram": {"bins": 0}},
        {"logging": {"level": "LOUD"}},
    ],
)
def test_schema_violations(tmp_path, overrides):
    with pytest.raises(ValidationError):
        load_config(tmp_path / "missing.yaml", overrides=overrides)


def test_dump_and_reload(tmp_path):
    cfg = load_config(tmp_path / "missing.yaml", overrides={"modes": {"ground_pdf": [1, 2, 1]}})
    out = dump_config(cfg, tmp_path / "nested" / "snap.yaml")
    assert out.exists()
    assert yaml.safe_load(out.read_text())["modes"]["ground_pdf"] == [1.0, 2.0, 1.0]
    assert load_config(out) == cfg


def test_shipped_config_is_valid():
    path = REPO / DEFAULT_PATH
    assert path.exists()
    assert load_config(path) == MatviewConfig().model_dump()


def test_dotted_access():
    cfg = {"modes": {"eps": 2.0, "circular": False}, "logging": {"level": "INFO"}}
    assert get(cfg, "modes.eps") == 2.0
    assert get(cfg, "modes.missing", 7) == 7
    assert get(cfg, "logging.level.deeper") is None
    assert flatten(cfg) == {"modes.eps": 2.0, "modes.circular": False, "logging.level": "INFO"}


def test_deep_update_leaves_base_untouched():
    base = {"modes": {"eps": 0.0, "circular": False}, "histogram": {"bins": 8}}
    out = deep_update(base, {"modes": {"eps": 1.0}, "histogram": 3})
    assert out == {"modes": {"eps": 1.0, "circular": False}, "histogram": 3}
    assert base == {"modes": {"eps": 0.0, "circular": False}, "histogram": {"bins": 8}}
