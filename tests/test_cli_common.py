"""Tests for CLI common utilities."""

import argparse

import pytest

from ggsnap.cli.common import (
    add_verbosity_args,
    get_log_level,
    resolve_config,
)
from ggsnap.config import default_config


class TestAddVerbosityArgs:
    """Tests for add_verbosity_args function."""

    def test_short_flags(self):
        parser = argparse.ArgumentParser()
        add_verbosity_args(parser)
        args = parser.parse_args(["-v", "-q"])
        assert args.verbose is True
        assert args.quiet is True

    def test_defaults_are_false(self):
        """Test that defaults are False."""
        parser = argparse.ArgumentParser()
        add_verbosity_args(parser)
        args = parser.parse_args([])
        assert args.verbose is False
        assert args.quiet is False
        assert args.debug is False


class TestGetLogLevel:
    """Tests for get_log_level function."""

    @pytest.mark.parametrize(
        "flags, expected",
        [
            ({}, "INFO"),
            ({"verbose": True}, "DEBUG"),
            ({"quiet": True}, "WARNING"),
            ({"debug": True}, "DEBUG"),
            ({"debug": True, "quiet": True}, "DEBUG"),
        ],
    )
    def test_levels(self, flags, expected):
        assert get_log_level(argparse.Namespace(**flags)) == expected


class TestResolveConfig:
    """Tests for resolve_config function."""

    def test_explicit_file(self, config_file):
        args = argparse.Namespace(config=str(config_file), allow_default=False)
        config = resolve_config(args)
        assert config is not None
        assert config.snapshot.master_volume == "gv0"

    def test_explicit_missing_file(self, tmp_path):
        args = argparse.Namespace(config=str(tmp_path / "nope.conf"), allow_default=False)
        assert resolve_config(args) is None

    def test_not_found_without_fallback(self, search_dirs, monkeypatch):
        monkeypatch.setattr("sys.argv", ["-c"])
        args = argparse.Namespace(config=None, allow_default=False)
        assert resolve_config(args) is None

    def test_not_found_with_fallback(self, search_dirs, monkeypatch):
        monkeypatch.setattr("sys.argv", ["-c"])
        args = argparse.Namespace(config=None, allow_default=True)
        assert resolve_config(args) == default_config()

    def test_parse_error_never_falls_back(self, tmp_path):
        bad = tmp_path / "ggsnap.conf"
        bad.write_text("[general]\n")
        args = argparse.Namespace(config=str(bad), allow_default=True)
        assert resolve_config(args) is None

    def test_search_finds_etc_file(self, search_dirs, monkeypatch, minimal_config_toml):
        _, etc_dir, _ = search_dirs
        (etc_dir / "ggsnap.conf").write_text(minimal_config_toml)
        monkeypatch.setattr("sys.argv", ["-c"])
        args = argparse.Namespace(config=None, allow_default=False)
        assert resolve_config(args) == default_config()
