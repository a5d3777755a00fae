"""ggsnap: ggsnap/__init__.py."""


__version__ = "0.1.0"


class GgsnapError(Exception):
    """Base class for errors raised by ggsnap."""

    pass
