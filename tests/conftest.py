"""Pytest configuration and shared fixtures."""

import stat
from pathlib import Path

import pytest

from ggsnap.config import loader


@pytest.fixture
def tmp_config_dir(tmp_path):
    """Create a temporary config directory."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    return config_dir


@pytest.fixture
def sample_config_toml():
    """Return a fully populated TOML configuration string."""
    return """
[general]
gluster_bin = '/usr/sbin/gluster'
ggsnap_slave_bin = '/root/ggsnap_slave'

[snapshot]
number_days_every_day = 10
number_months_with_two = 3
number_months_total = 12
master_volume = 'gv0'
slave_volume = 'gv0-slave'
slave_hostname = 'slave.example.com'
slave_user = 'root'

[mail_from_master]
smtp_server = 'mysmtp.server.com'
authentification_mechanism = 'plain'
username = 'foobar'
password = 'noob'
from_sender_address = 'aa@bb.cc'
to_addresses = [ 'foobar@foobar.com', 'noob@noob.com' ]
enable = true
"""


@pytest.fixture
def minimal_config_toml():
    """Return a minimal valid TOML configuration string."""
    return """
[general]
gluster_bin = '/usr/sbin/gluster'
ggsnap_slave_bin = '/root/ggsnap_slave'

[snapshot]
number_days_every_day = 10
number_months_with_two = 3
number_months_total = 12
"""


@pytest.fixture
def config_file(tmp_config_dir, sample_config_toml):
    """Create a temporary config file with sample content."""
    config_path = tmp_config_dir / "ggsnap.conf"
    config_path.write_text(sample_config_toml)
    return config_path


@pytest.fixture
def search_dirs(tmp_path, monkeypatch):
    """Point the /etc search locations into tmp_path.

    Returns the (exe_dir, etc_dir, etc_sub_dir) directories, all created
    and empty. The exe locator to use is ``lambda: exe_dir / "ggsnap"``.
    """
    exe_dir = tmp_path / "bin"
    etc_dir = tmp_path / "etc"
    etc_sub_dir = etc_dir / "ggsnap"
    for d in (exe_dir, etc_sub_dir):
        d.mkdir(parents=True)
    monkeypatch.setattr(
        loader,
        "ETC_CONFIG_PATHS",
        (etc_dir / "ggsnap.conf", etc_sub_dir / "ggsnap.conf"),
    )
    return exe_dir, etc_dir, etc_sub_dir


@pytest.fixture
def make_gluster(tmp_path):
    """Return a factory writing a fake gluster executable.

    The fake prints ``stdout`` and ``stderr``, records its arguments to
    ``calls.log`` and exits with ``exit_code``.
    """

    def _make(stdout="", stderr="", exit_code=0, name="gluster"):
        out_file = tmp_path / f"{name}.out"
        err_file = tmp_path / f"{name}.err"
        out_file.write_bytes(stdout if isinstance(stdout, bytes) else stdout.encode())
        err_file.write_bytes(stderr if isinstance(stderr, bytes) else stderr.encode())
        calls = tmp_path / "calls.log"
        script = tmp_path / name
        script.write_text(
            "#!/bin/sh\n"
            f'echo "$@" >> "{calls}"\n'
            f'cat "{out_file}"\n'
            f'cat "{err_file}" >&2\n'
            f"exit {exit_code}\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _make


@pytest.fixture
def gluster_calls(tmp_path):
    """Return a callable reading the arguments the fake gluster received."""

    def _calls() -> list[str]:
        calls = tmp_path / "calls.log"
        if not calls.exists():
            return []
        return calls.read_text().splitlines()

    return _calls


@pytest.fixture
def write_config():
    """Return a function writing a config file for a given gluster binary."""

    def _write(path: Path, gluster_bin: Path | str, extra: str = "") -> Path:
        path.write_text(
            f"""
[general]
gluster_bin = '{gluster_bin}'
ggsnap_slave_bin = '/root/ggsnap_slave'

[snapshot]
number_days_every_day = 10
number_months_with_two = 3
number_months_total = 12
{extra}
"""
        )
        return path

    return _write
