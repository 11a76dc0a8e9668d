import pytest
from pydantic import ValidationError

from config import CollectionSettings, HybridOpsSettings, MonitoringSettings, load_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("HYBRID_DEFAULT_INDEX_FILE_SIZE", raising=False)
    settings = HybridOpsSettings()
    assert settings.collection.default_index_file_size == 1024
    assert settings.collection.primary_field_name == "_id"
    assert settings.connection.port == "19530"
    assert settings.monitoring.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("HYBRID_DEFAULT_INDEX_FILE_SIZE", "2048")
    monkeypatch.setenv("MILVUS_HOST", "milvus.internal")
    settings = load_settings()
    assert settings.collection.default_index_file_size == 2048
    assert settings.connection.host == "milvus.internal"


def test_load_from_yaml(tmp_path):
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "collection:\n"
        "  default_index_file_size: 256\n"
        "monitoring:\n"
        "  log_level: debug\n"
    )
    settings = load_settings(str(config_file))
    assert settings.collection.default_index_file_size == 256
    assert settings.monitoring.log_level == "DEBUG"


def test_missing_yaml_falls_back_to_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "absent.yaml"))
    assert isinstance(settings, HybridOpsSettings)


def test_to_yaml(monkeypatch):
    monkeypatch.delenv("HYBRID_DEFAULT_INDEX_FILE_SIZE", raising=False)
    text = HybridOpsSettings().to_yaml()
    assert "default_index_file_size: 1024" in text


def test_invalid_values():
    with pytest.raises(ValidationError):
        CollectionSettings(default_index_file_size=0)
    with pytest.raises(ValidationError):
        CollectionSettings(default_varchar_max_length=70000)
    with pytest.raises(ValidationError):
        MonitoringSettings(log_level="LOUD")
