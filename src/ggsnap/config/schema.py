"""Configuration schema definitions using dataclasses.

Defines the structure of ggsnap.conf and the built-in default configuration.
"""

from dataclasses import dataclass, field
from typing import Optional

DEFAULT_GLUSTER_BIN = "/usr/sbin/gluster"
DEFAULT_SLAVE_BIN = "/root/ggsnap_slave"


@dataclass(frozen=True)
class General:
    """Settings from the [general] section.

    Attributes:
        gluster_bin: Path to the gluster command line tool
        ggsnap_slave_bin: Path to ggsnap_slave on the slave host
    """

    gluster_bin: str
    ggsnap_slave_bin: str


@dataclass(frozen=True)
class Snapshot:
    """Settings from the [snapshot] section.

    Attributes:
        number_days_every_day: Days during which every snapshot is kept
        number_months_with_two: Months during which two snapshots per month are kept
        number_months_total: Months after which all snapshots are deleted
        master_volume: Gluster volume snapshotted on this host
        slave_volume: Geo-replicated volume on the slave host
        slave_hostname: Host running the slave volume
        slave_user: User to log in as on the slave host
    """

    number_days_every_day: int
    number_months_with_two: int
    number_months_total: int
    master_volume: Optional[str] = None
    slave_volume: Optional[str] = None
    slave_hostname: Optional[str] = None
    slave_user: Optional[str] = None

    @property
    def replication_fields(self) -> dict[str, Optional[str]]:
        return {
            "master_volume": self.master_volume,
            "slave_volume": self.slave_volume,
            "slave_hostname": self.slave_hostname,
            "slave_user": self.slave_user,
        }

    @property
    def replication_configured(self) -> bool:
        """True when every replication field is set."""
        return all(v is not None for v in self.replication_fields.values())


@dataclass(frozen=True)
class MailFromMaster:
    """Settings from the optional [mail_from_master] section.

    Attributes:
        smtp_server: SMTP server used to send reports
        authentification_mechanism: SMTP authentication mechanism (e.g. "plain")
        username: SMTP user
        password: SMTP password
        from_sender_address: Sender address of report mails
        to_addresses: Recipients, in order
        enable: Whether mail is actually sent
    """

    smtp_server: str
    authentification_mechanism: str
    username: str
    password: str = field(repr=False)
    from_sender_address: str
    to_addresses: list[str]
    enable: bool


@dataclass(frozen=True)
class Config:
    """Root configuration object.

    Attributes:
        general: Binary locations
        snapshot: Retention counters and replication settings
        mail_from_master: Mail notification settings, None when not configured
    """

    general: General
    snapshot: Snapshot
    mail_from_master: Optional[MailFromMaster] = None

    @property
    def mail_enabled(self) -> bool:
        return self.mail_from_master is not None and self.mail_from_master.enable


def default_config() -> Config:
    """Return the configuration used when no config file is wanted.

    Replication and mail settings are all unset.
    """
    return Config(
        general=General(
            gluster_bin=DEFAULT_GLUSTER_BIN,
            ggsnap_slave_bin=DEFAULT_SLAVE_BIN,
        ),
        snapshot=Snapshot(
            number_days_every_day=10,
            number_months_with_two=3,
            number_months_total=12,
        ),
        mail_from_master=None,
    )
