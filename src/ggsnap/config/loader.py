"""TOML configuration discovery, loading and validation.

Handles config file search, parsing and validation with helpful error messages.
"""

import enum
import sys
import tomllib
from pathlib import Path
from typing import Any, Callable, Optional

from .. import GgsnapError
from ..__logger__ import logger
from .schema import Config, General, MailFromMaster, Snapshot

CONFIG_FILE_NAME = "ggsnap.conf"

# Searched after the executable's own directory, in priority order
ETC_CONFIG_PATHS = (
    Path("/etc") / CONFIG_FILE_NAME,
    Path("/etc/ggsnap") / CONFIG_FILE_NAME,
)

NOT_FOUND_MESSAGE = (
    f"Config file: {CONFIG_FILE_NAME} is not found in current dir, /etc/ or /etc/ggsnap/"
)

# Counters are unsigned 32 bit values
MAX_COUNT = 2**32 - 1


class ConfigReadErr(enum.Enum):
    """Kind of failure while resolving the configuration."""

    CONFIG_NOT_FOUND = "config_not_found"
    READ_FILE_ERR = "read_file_err"
    CONFIG_PARSE_ERR = "config_parse_err"


class ConfigError(GgsnapError):
    """Configuration loading error, classified by kind."""

    def __init__(self, kind: ConfigReadErr, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


def current_exe() -> Optional[Path]:
    """Return the path of the running executable, or None if unknown."""
    argv0 = sys.argv[0] if sys.argv else ""
    if not argv0 or argv0 == "-c":
        return None
    path = Path(argv0).resolve()
    if not path.is_file():
        return None
    return path


def config_search_paths(
    exe_locator: Callable[[], Optional[Path]] = current_exe,
) -> list[Path]:
    """Return the candidate config file paths in priority order."""
    paths = []
    exe = exe_locator()
    if exe is not None:
        paths.append(exe.parent / CONFIG_FILE_NAME)
    else:
        logger.debug("Executable path unknown, skipping its directory")
    paths.extend(ETC_CONFIG_PATHS)
    return paths


def read_config_file(path: Path | str) -> str:
    """Read a config file that is already known to be the one to use.

    Raises:
        ConfigError: READ_FILE_ERR if the file opens but cannot be read
    """
    path = Path(path)
    try:
        f = open(path, encoding="utf-8")
    except IsADirectoryError as e:
        # A directory opens on Linux, reading it is what fails
        raise _read_error(path, e) from e
    with f:
        try:
            return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise _read_error(path, e) from e


def _read_error(path: Path, e: Exception) -> ConfigError:
    return ConfigError(
        ConfigReadErr.READ_FILE_ERR,
        f"Error: Can not read config file: {path}\n{e}",
    )


def find_config_file(
    exe_locator: Callable[[], Optional[Path]] = current_exe,
) -> tuple[Path, str]:
    """Find the first openable config file and return its path and content.

    A candidate that cannot be opened counts as absent and the search goes on.
    A candidate that opens but fails to read ends the search.

    Returns:
        Tuple of (path of the config file, its content)

    Raises:
        ConfigError: CONFIG_NOT_FOUND or READ_FILE_ERR
    """
    for path in config_search_paths(exe_locator):
        try:
            content = read_config_file(path)
        except OSError as e:
            logger.debug("Config candidate %s not usable: %s", path, e)
            continue
        logger.debug("Using config file: %s", path)
        return path, content

    raise ConfigError(ConfigReadErr.CONFIG_NOT_FOUND, NOT_FOUND_MESSAGE)


def _parse_error(message: str) -> ConfigError:
    return ConfigError(
        ConfigReadErr.CONFIG_PARSE_ERR, f"Error parse config file: {message}"
    )


def _require(data: dict[str, Any], section: str, key: str, kind: type) -> Any:
    """Fetch a required field and check its TOML type."""
    if key not in data:
        raise _parse_error(f"missing field `{key}` in [{section}]")
    return _check_type(data[key], section, key, kind)


def _optional(data: dict[str, Any], section: str, key: str, kind: type) -> Any:
    if key not in data:
        return None
    return _check_type(data[key], section, key, kind)


def _check_type(value: Any, section: str, key: str, kind: type) -> Any:
    # bool is a subclass of int, TOML keeps them apart
    if isinstance(value, bool) and kind is not bool:
        ok = False
    else:
        ok = isinstance(value, kind)
    if not ok:
        raise _parse_error(
            f"invalid type for `{key}` in [{section}]: "
            f"expected {kind.__name__}, found {type(value).__name__}"
        )
    if kind is int and value < 0:
        raise _parse_error(
            f"invalid value for `{key}` in [{section}]: {value} is negative"
        )
    if kind is int and value > MAX_COUNT:
        raise _parse_error(
            f"invalid value for `{key}` in [{section}]: {value} is larger than {MAX_COUNT}"
        )
    return value


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data[name]
    if not isinstance(section, dict):
        raise _parse_error(f"`{name}` must be a table")
    known = _KNOWN_KEYS[name]
    for key in section:
        if key not in known:
            logger.debug("Ignoring unknown key `%s` in [%s]", key, name)
    return section


def _parse_general(data: dict[str, Any]) -> General:
    """Parse [general] section from dict."""
    return General(
        gluster_bin=_require(data, "general", "gluster_bin", str),
        ggsnap_slave_bin=_require(data, "general", "ggsnap_slave_bin", str),
    )


def _parse_snapshot(data: dict[str, Any]) -> Snapshot:
    """Parse [snapshot] section from dict."""
    return Snapshot(
        number_days_every_day=_require(data, "snapshot", "number_days_every_day", int),
        number_months_with_two=_require(
            data, "snapshot", "number_months_with_two", int
        ),
        number_months_total=_require(data, "snapshot", "number_months_total", int),
        master_volume=_optional(data, "snapshot", "master_volume", str),
        slave_volume=_optional(data, "snapshot", "slave_volume", str),
        slave_hostname=_optional(data, "snapshot", "slave_hostname", str),
        slave_user=_optional(data, "snapshot", "slave_user", str),
    )


def _parse_mail(data: dict[str, Any]) -> MailFromMaster:
    """Parse [mail_from_master] section from dict."""
    section = "mail_from_master"
    to_addresses = _require(data, section, "to_addresses", list)
    for address in to_addresses:
        _check_type(address, section, "to_addresses", str)

    return MailFromMaster(
        smtp_server=_require(data, section, "smtp_server", str),
        authentification_mechanism=_require(
            data, section, "authentification_mechanism", str
        ),
        username=_require(data, section, "username", str),
        password=_require(data, section, "password", str),
        from_sender_address=_require(data, section, "from_sender_address", str),
        to_addresses=list(to_addresses),
        enable=_require(data, section, "enable", bool),
    )


_KNOWN_KEYS = {
    "general": {"gluster_bin", "ggsnap_slave_bin"},
    "snapshot": {
        "number_days_every_day",
        "number_months_with_two",
        "number_months_total",
        "master_volume",
        "slave_volume",
        "slave_hostname",
        "slave_user",
    },
    "mail_from_master": {
        "smtp_server",
        "authentification_mechanism",
        "username",
        "password",
        "from_sender_address",
        "to_addresses",
        "enable",
    },
}


def parse_config(content: str) -> Config:
    """Parse config file content into a Config.

    Only structure and types are checked here, see validate_config for
    cross-field checks.

    Raises:
        ConfigError: CONFIG_PARSE_ERR on TOML syntax or schema errors
    """
    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise _parse_error(str(e)) from e

    for name in data:
        if name not in _KNOWN_KEYS:
            logger.debug("Ignoring unknown section [%s]", name)

    for name in ("general", "snapshot"):
        if name not in data:
            raise _parse_error(f"missing section [{name}]")

    mail = None
    if "mail_from_master" in data:
        mail = _parse_mail(_section(data, "mail_from_master"))

    return Config(
        general=_parse_general(_section(data, "general")),
        snapshot=_parse_snapshot(_section(data, "snapshot")),
        mail_from_master=mail,
    )


def get_config(
    exe_locator: Callable[[], Optional[Path]] = current_exe,
) -> Config:
    """Locate, read and parse the configuration.

    Searches, in order, the directory of the running executable, /etc/
    and /etc/ggsnap/ for ggsnap.conf. Falling back to default_config() when
    nothing is found is left to the caller.

    Args:
        exe_locator: Returns the running executable's path, or None

    Returns:
        Parsed Config

    Raises:
        ConfigError: CONFIG_NOT_FOUND, READ_FILE_ERR or CONFIG_PARSE_ERR
    """
    path, content = find_config_file(exe_locator)
    logger.debug("Parsing config file: %s", path)
    return parse_config(content)


def load_config(path: Path | str) -> Config:
    """Load the configuration from an explicitly given file.

    Raises:
        ConfigError: CONFIG_NOT_FOUND if the file cannot be opened,
            otherwise as get_config
    """
    try:
        content = read_config_file(path)
    except OSError as e:
        raise ConfigError(
            ConfigReadErr.CONFIG_NOT_FOUND, f"Config file not found: {path}\n{e}"
        ) from e
    return parse_config(content)


def validate_config(config: Config) -> list[str]:
    """Validate configuration and return list of warnings."""
    warnings = []

    if not config.general.gluster_bin:
        warnings.append("gluster_bin is empty")
    if not config.general.ggsnap_slave_bin:
        warnings.append("ggsnap_slave_bin is empty")

    snapshot = config.snapshot
    if snapshot.number_months_with_two > snapshot.number_months_total:
        warnings.append(
            f"number_months_with_two ({snapshot.number_months_with_two}) is larger "
            f"than number_months_total ({snapshot.number_months_total})"
        )

    replication = snapshot.replication_fields
    unset = [k for k, v in replication.items() if v is None]
    if unset and len(unset) != len(replication):
        warnings.append(
            "Replication partially configured, missing: " + ", ".join(unset)
        )

    mail = config.mail_from_master
    if mail is not None and not mail.to_addresses:
        warnings.append("[mail_from_master] has no to_addresses")

    return warnings


def generate_example_config() -> str:
    """Generate example configuration file content."""
    return """# ggsnap configuration
# Searched in the directory of the ggsnap binary, /etc/ and /etc/ggsnap/

[general]
gluster_bin = "/usr/sbin/gluster"
ggsnap_slave_bin = "/root/ggsnap_slave"

[snapshot]
number_days_every_day = 10   # Keep every snapshot from the last 10 days
number_months_with_two = 3   # Then keep two per month for 3 months
number_months_total = 12     # Then one per month up to 12 months

# Geo-replication, leave all unset for local-only mode
# master_volume = "gv0"
# slave_volume = "gv0-slave"
# slave_hostname = "slave.example.com"
# slave_user = "root"

# Mail reports
# [mail_from_master]
# smtp_server = "smtp.example.com"
# authentification_mechanism = "plain"
# username = "ggsnap"
# password = "secret"
# from_sender_address = "ggsnap@example.com"
# to_addresses = ["admin@example.com"]
# enable = true
"""
