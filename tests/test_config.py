import pytest

from healthreport.core.config import (
    CPU_SAMPLE_SECONDS,
    CRITICAL_SERVICES,
    Config,
    ConfigError,
)


def test_defaults():
    config = Config()
    assert config.report.output_path == "SystemHealthReport.html"
    assert config.report.json_path is None
    assert config.collection.ping_targets == ["8.8.8.8", "google.com"]
    assert CPU_SAMPLE_SECONDS == 1.0
    assert len(CRITICAL_SERVICES) == 6


def test_missing_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv("HEALTH_REPORT_OUTPUT", raising=False)
    config = Config.from_yaml(str(tmp_path / "nope.yaml"))
    assert config.report.output_path == "SystemHealthReport.html"


def test_yaml_round_trip(tmp_path, monkeypatch):
    for name in ("HEALTH_REPORT_OUTPUT", "HEALTH_REPORT_JSON", "HEALTH_REPORT_PING_TARGETS", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = Config()
    config.report.output_path = "out/health.html"
    config.collection.ping_targets = ["1.1.1.1"]
    config.logging.level = "DEBUG"
    path = tmp_path / "config.yaml"
    config.to_yaml(str(path))

    loaded = Config.from_yaml(str(path))
    assert loaded.report.output_path == "out/health.html"
    assert loaded.collection.ping_targets == ["1.1.1.1"]
    assert loaded.logging.level == "DEBUG"


def test_environment_overrides(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text("report:\n  output_path: from-file.html\n", encoding="utf-8")
    monkeypatch.setenv("HEALTH_REPORT_OUTPUT", "from-env.html")
    monkeypatch.setenv("HEALTH_REPORT_PING_TARGETS", "1.1.1.1, example.com,")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    config = Config.from_yaml(str(path))

    assert config.report.output_path == "from-env.html"
    assert config.collection.ping_targets == ["1.1.1.1", "example.com"]
    assert config.logging.level == "WARNING"


def test_empty_yaml_file(tmp_path, monkeypatch):
    monkeypatch.delenv("HEALTH_REPORT_OUTPUT", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text("", encoding="utf-8")
    assert Config.from_yaml(str(path)).report.output_path == "SystemHealthReport.html"


def test_non_mapping_file_is_a_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="expected a mapping, got list"):
        Config.from_yaml(str(path))


def test_unknown_key_is_a_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("report:\n  output: typo.html\n", encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        Config.from_yaml(str(path))

    message = str(excinfo.value)
    assert str(path) in message
    assert "unknown key(s) in 'report': output" in message
    assert "output_path" in message


def test_scalar_section_is_a_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("collection: 8.8.8.8\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="section 'collection' must be a mapping"):
        Config.from_yaml(str(path))


def test_malformed_yaml_is_a_config_error(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("report: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="Invalid YAML"):
        Config.from_yaml(str(path))
