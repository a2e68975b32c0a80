import os

import pytest

from engine import EngineConfig

HC_VARS = ("HC_SEED", "HC_ZONE_TOLERANCE", "HC_FUSION_RADIUS", "HC_LOG_LEVEL", "HC_LOG_JSON")


@pytest.fixture
def clean_env(monkeypatch):
    for name in HC_VARS:
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
    # load_dotenv() writes straight into os.environ.
    for name in HC_VARS:
        os.environ.pop(name, None)


def test_defaults():
    config = EngineConfig()
    assert config.seed is None
    assert config.zone_tolerance == 80.0
    assert config.fusion_radius == 100.0
    assert config.log_level == "INFO"
    assert not config.log_json


@pytest.mark.parametrize("field, value", [
    ("zone_tolerance", 0),
    ("zone_tolerance", 81),
    ("fusion_radius", -1),
    ("fusion_radius", 150),
    ("log_level", "LOUD"),
])
def test_invalid_values_raise(field, value):
    with pytest.raises(ValueError):
        EngineConfig(**{field: value})


def test_json_roundtrip(tmp_path):
    config = EngineConfig(seed=12, zone_tolerance=60, fusion_radius=90, log_level="debug", log_json=True)
    path = config.save_json(tmp_path / "nested" / "config.json")

    loaded = EngineConfig.load_json(path)

    assert loaded == config
    assert loaded.log_level == "DEBUG"


def test_from_dict_ignores_unknown_keys():
    assert EngineConfig.from_dict({"seed": 4, "theme": "dark"}) == EngineConfig(seed=4)


def test_from_env_reads_variables(clean_env, tmp_path):
    clean_env.setenv("HC_SEED", "21")
    clean_env.setenv("HC_ZONE_TOLERANCE", "50")
    clean_env.setenv("HC_LOG_JSON", "true")

    config = EngineConfig.from_env(tmp_path / "missing.env")

    assert config.seed == 21
    assert config.zone_tolerance == 50.0
    assert config.fusion_radius == 100.0
    assert config.log_json


def test_from_env_loads_dotenv_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("HC_FUSION_RADIUS=75\nHC_LOG_LEVEL=warning\n", encoding="utf-8")

    config = EngineConfig.from_env(env_file)

    assert config.fusion_radius == 75.0
    assert config.log_level == "WARNING"


def test_from_env_rejects_out_of_range(clean_env, tmp_path):
    clean_env.setenv("HC_ZONE_TOLERANCE", "120")
    with pytest.raises(ValueError):
        EngineConfig.from_env(tmp_path / "missing.env")
