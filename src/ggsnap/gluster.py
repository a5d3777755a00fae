# pyright: standard

"""ggsnap: ggsnap/gluster.py
Run gluster snapshot commands and classify their failures.
"""

import subprocess

from . import GgsnapError
from .__logger__ import logger

NO_SNAPSHOTS = "No snapshots present"


class GlusterError(GgsnapError):
    """A gluster command could not be run or exited non-zero."""

    pass


def decode_output(data: bytes | None) -> str:
    """Decode process output, replacing invalid byte sequences."""
    if not data:
        return ""
    return data.decode("utf-8", errors="replace")


class GlusterCli:
    """Thin wrapper around the gluster command line tool."""

    def __init__(self, gluster_bin: str) -> None:
        self.gluster_bin = gluster_bin

    def __repr__(self) -> str:
        return f"GlusterCli({self.gluster_bin!r})"

    def _run(self, args: list[str], what: str) -> str:
        cmd = [self.gluster_bin, *args]
        logger.debug("Executing: %s", cmd)
        try:
            result = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
            )
        except OSError as e:
            raise GlusterError(
                f"Error executing command: {' '.join(cmd)}\n{e}"
            ) from e

        stdout = decode_output(result.stdout)
        if result.returncode != 0:
            logger.debug("%s exited with %d", cmd, result.returncode)
            raise GlusterError(f"{what}: {stdout}{decode_output(result.stderr)}")
        return stdout

    def list_snapshots_raw(self) -> str:
        """Return the output of 'gluster snapshot list' as text."""
        return self._run(["snapshot", "list"], "Error getting snapshots")

    def list_snapshots(self) -> list[str]:
        """Return snapshot names, in the order gluster lists them."""
        return parse_snapshot_list(self.list_snapshots_raw())

    def delete_snapshot(self, name: str) -> str:
        """Delete a snapshot without interactive confirmation."""
        return self._run(
            ["--mode=script", "snapshot", "delete", name],
            f"Error deleting snapshot {name}",
        )


def parse_snapshot_list(output: str) -> list[str]:
    """Split 'gluster snapshot list' output into snapshot names."""
    names = []
    for line in output.splitlines():
        line = line.strip()
        if not line or line == NO_SNAPSHOTS:
            continue
        names.append(line)
    return names
