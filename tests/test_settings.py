import pytest
from pydantic import ValidationError

from j2c.schemas import ArrayMode
from j2c.settings import Settings

from conftest import CONFIG_DIR


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path, monkeypatch):
    # Keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)


def test_defaults_without_config():
    settings = Settings.load()
    assert settings.convert.array_mode == ArrayMode.STRINGIFY
    assert settings.convert.max_depth == 3
    assert settings.convert.delimiter == ","
    assert settings.logging.level == "WARNING"
    assert settings.input_encoding == "utf-8-sig"
    assert settings.csv_encoding == "utf-8"


def test_yaml_file_overrides_defaults(tmp_path):
    cfg = tmp_path / "custom.yaml"
    cfg.write_text(
        "convert:\n  array_mode: concatenate\n  max_depth: 2\nlogging:\n  level: DEBUG\n",
        encoding="utf-8",
    )
    settings = Settings.load(str(cfg))
    assert settings.convert.array_mode == ArrayMode.CONCATENATE
    assert settings.convert.max_depth == 2
    assert settings.convert.delimiter == ","
    assert settings.logging.level == "DEBUG"


def test_base_yaml_is_merged_first():
    settings = Settings.load(str(CONFIG_DIR / "excel.yaml"))
    assert settings.convert.delimiter == ";"
    assert settings.convert.array_mode == ArrayMode.STRINGIFY
    assert settings.csv_encoding == "utf-8-sig"


def test_config_path_from_env(monkeypatch):
    monkeypatch.setenv("J2C_CONFIG", str(CONFIG_DIR / "excel.yaml"))
    assert Settings.load().convert.delimiter == ";"


def test_env_beats_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "custom.yaml"
    cfg.write_text("convert:\n  array_mode: concatenate\n  max_depth: 2\n", encoding="utf-8")
    monkeypatch.setenv("J2C_CONVERT__MAX_DEPTH", "5")
    monkeypatch.setenv("J2C_LOGGING__FORMAT", "json")
    settings = Settings.load(str(cfg))
    assert settings.convert.max_depth == 5
    assert settings.convert.array_mode == ArrayMode.CONCATENATE
    assert settings.logging.format == "json"


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("J2C_CSV_ENCODING=utf-16\n", encoding="utf-8")
    assert Settings.load().csv_encoding == "utf-16"


def test_invalid_values_rejected(tmp_path):
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("convert:\n  max_depth: 0\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        Settings.load(str(cfg))

    cfg.write_text("convert:\n  delimiter: '::'\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        Settings.load(str(cfg))


def test_missing_config_file(tmp_path):
    with pytest.raises(OSError):
        Settings.load(str(tmp_path / "nope.yaml"))
