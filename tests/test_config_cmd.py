"""Tests for config command functionality."""

from ggsnap.cli.dispatcher import main
from ggsnap.config import default_config, parse_config


class TestConfigValidate:
    """Tests for 'ggsnap config validate'."""

    def test_valid_explicit_file(self, config_file, capsys):
        assert main(["-c", str(config_file), "config", "validate"]) == 0
        out = capsys.readouterr().out
        assert "Configuration is valid." in out
        assert "Replication: gv0 -> root@slave.example.com:gv0-slave" in out
        assert "Mail: enabled, to foobar@foobar.com, noob@noob.com" in out

    def test_warnings_listed(self, tmp_path, minimal_config_toml, capsys):
        path = tmp_path / "ggsnap.conf"
        path.write_text(minimal_config_toml.replace("= 3", "= 30"))

        assert main(["-c", str(path), "config", "validate"]) == 0
        out = capsys.readouterr().out
        assert "Warnings:" in out
        assert "number_months_with_two (30)" in out

    def test_search_not_found(self, search_dirs, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", ["-c"])

        assert main(["config", "validate"]) == 1
        out = capsys.readouterr().out
        assert "Searched locations:" in out
        assert "ggsnap.conf is not found" in out

    def test_parse_error(self, tmp_path, capsys):
        path = tmp_path / "ggsnap.conf"
        path.write_text("[general]\ngluster_bin = '/usr/sbin/gluster'\n")

        assert main(["-c", str(path), "config", "validate"]) == 1
        assert "Error parse config file" in capsys.readouterr().out


class TestConfigShow:
    """Tests for 'ggsnap config show'."""

    def test_default_fallback(self, search_dirs, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", ["-c"])

        assert main(["--allow-default", "config", "show"]) == 0
        out = capsys.readouterr().out
        assert "gluster_bin: /usr/sbin/gluster" in out
        assert "Replication: not configured" in out
        assert "Mail: not configured" in out

    def test_missing_without_fallback(self, search_dirs, monkeypatch):
        monkeypatch.setattr("sys.argv", ["-c"])
        assert main(["config", "show"]) == 1


class TestConfigInit:
    """Tests for 'ggsnap config init'."""

    def test_prints_example(self, capsys):
        assert main(["config", "init"]) == 0
        assert parse_config(capsys.readouterr().out) == default_config()

    def test_writes_file(self, tmp_path):
        output = tmp_path / "ggsnap.conf"

        assert main(["config", "init", "-o", str(output)]) == 0
        assert parse_config(output.read_text()) == default_config()

    def test_unwritable_output(self, tmp_path, capsys):
        output = tmp_path / "missing-dir" / "ggsnap.conf"

        assert main(["config", "init", "-o", str(output)]) == 1
        assert "Error writing file" in capsys.readouterr().out


class TestConfigUsage:
    def test_no_action(self, capsys):
        assert main(["config"]) == 1
        assert "Usage: ggsnap config" in capsys.readouterr().out
