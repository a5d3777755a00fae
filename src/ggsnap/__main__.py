"""ggsnap: ggsnap/__main__.py.

Prune GlusterFS snapshots according to the retention in ggsnap.conf.
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
