import pytest

from devdb.errors import DevDBError
from devdb.services.config_loader import ConfigLoader


def test_config_loader_loads_yaml_mapping(tmp_path):
    config_file = tmp_path / ".devdb.yml"
    config_file.write_text(
        "port: 15432\nuser: alice\nbase: postgres\ndetached: true\n",
        encoding="utf-8",
    )

    loaded = ConfigLoader().load(str(config_file))

    assert loaded["port"] == 15432
    assert loaded["user"] == "alice"
    assert loaded["base"] == "postgres"
    assert loaded["detached"] is True


def test_config_loader_returns_empty_mapping_without_path():
    assert ConfigLoader().load(None) == {}


def test_config_loader_rejects_unknown_keys(tmp_path):
    config_file = tmp_path / ".devdb.yml"
    config_file.write_text("unknown_key: true\n", encoding="utf-8")

    with pytest.raises(DevDBError, match="Unknown configuration keys"):
        ConfigLoader().load(str(config_file))


def test_config_loader_rejects_non_mapping_root(tmp_path):
    config_file = tmp_path / ".devdb.yml"
    config_file.write_text("- port\n- user\n", encoding="utf-8")

    with pytest.raises(DevDBError, match="YAML mapping"):
        ConfigLoader().load(str(config_file))


def test_config_loader_reports_missing_file(tmp_path):
    with pytest.raises(DevDBError, match="Config file not found"):
        ConfigLoader().load(str(tmp_path / "missing.yml"))
