import pytest
from click.testing import CliRunner

import devdb.cli as cli_module


class FakeDevDB:
    SUPPORTED_ENGINES = ["mysql", "mariadb", "postgres"]

    def __init__(self, captured, **kwargs):
        captured.update(kwargs)
        self.captured = captured

    def run(self):
        self.captured["ran"] = True
        return 0

    def remove(self, name):
        self.captured["removed"] = name
        return 0


@pytest.fixture
def captured(monkeypatch):
    values = {}
    monkeypatch.setattr(cli_module, "DevDB", lambda **kwargs: FakeDevDB(values, **kwargs))
    return values


def test_cli_routes_bare_dump_file_to_up(tmp_path, monkeypatch, captured):
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.cli, ["dump.sql"])

    assert result.exit_code == 0
    assert captured["dump_file"] == "dump.sql"
    assert captured["user"] == "devdb"
    assert captured["password"] == "devdb"
    assert captured["port"] is None
    assert captured["detached"] is False
    assert captured["ran"] is True


def test_cli_parses_short_options(tmp_path, monkeypatch, captured):
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(
        cli_module.cli,
        ["-p", "15432", "-d", "-b", "postgres", "-f", "-u", "alice", "-P", "secret", "dump.sql"],
    )

    assert result.exit_code == 0
    assert captured["port"] == 15432
    assert captured["detached"] is True
    assert captured["base"] == "postgres"
    assert captured["force"] is True
    assert captured["user"] == "alice"
    assert captured["password"] == "secret"


def test_cli_passes_export_targets(tmp_path, monkeypatch, captured):
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(
        cli_module.cli,
        ["--to-docker", "docker.zip", "--to-compose", "compose.zip", "dump.sql"],
    )

    assert result.exit_code == 0
    assert captured["to_docker"] == "docker.zip"
    assert captured["to_compose"] == "compose.zip"


def test_cli_uses_config_and_allows_cli_override(tmp_path, monkeypatch, captured):
    monkeypatch.chdir(tmp_path)
    config_file = tmp_path / "custom.yml"
    config_file.write_text("port: 13306\nuser: fromconfig\ndetached: true\n", encoding="utf-8")

    result = CliRunner().invoke(
        cli_module.cli,
        ["--config", str(config_file), "-u", "fromcli", "dump.sql"],
    )

    assert result.exit_code == 0
    assert captured["port"] == 13306
    assert captured["user"] == "fromcli"
    assert captured["detached"] is True


def test_cli_uses_default_config_file_when_present(tmp_path, monkeypatch, captured):
    (tmp_path / ".devdb.yml").write_text("base: mariadb\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.cli, ["dump.sql"])

    assert result.exit_code == 0
    assert captured["base"] == "mariadb"


def test_cli_rejects_invalid_config(tmp_path, monkeypatch, captured):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".devdb.yml").write_text("bogus: 1\n", encoding="utf-8")

    result = CliRunner().invoke(cli_module.cli, ["dump.sql"])

    assert result.exit_code != 0
    assert "Unknown configuration keys" in result.output
    assert "ran" not in captured


def test_cli_without_arguments_prints_help_and_fails(captured):
    result = CliRunner().invoke(cli_module.cli, [])

    assert result.exit_code == 1
    assert "Usage:" in result.output


def test_cli_without_dump_file_prints_help_and_fails(captured):
    result = CliRunner().invoke(cli_module.cli, ["-d"])

    assert result.exit_code == 1
    assert "devdb rm|remove <name>" in result.output
    assert "ran" not in captured


def test_cli_help_command(captured):
    result = CliRunner().invoke(cli_module.cli, ["help"])

    assert result.exit_code == 0
    assert "devdb [options] <dump-file>" in result.output


@pytest.mark.parametrize("command", ["rm", "remove"])
def test_cli_remove_commands(command, captured):
    result = CliRunner().invoke(cli_module.cli, [command, "devdb_mysql"])

    assert result.exit_code == 0
    assert captured["removed"] == "devdb_mysql"


def test_main_maps_unknown_flag_to_exit_code_one(captured):
    with pytest.raises(SystemExit) as exc_info:
        cli_module.main(["--bogus", "dump.sql"])

    assert exc_info.value.code == 1
    assert "ran" not in captured


def test_main_returns_command_exit_code(tmp_path, monkeypatch, captured):
    monkeypatch.chdir(tmp_path)

    with pytest.raises(SystemExit) as exc_info:
        cli_module.main(["dump.sql"])

    assert exc_info.value.code == 0
    assert captured["ran"] is True


def test_cli_rejects_non_integer_port_from_config(tmp_path, monkeypatch, captured):
    (tmp_path / ".devdb.yml").write_text("port: not-a-port\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli_module.cli, ["dump.sql"])

    assert result.exit_code == 1
    assert "port must be an integer" in result.output
    assert "ran" not in captured
