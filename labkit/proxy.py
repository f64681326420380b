"""Starting point of a caching web proxy."""

from __future__ import annotations

import sys
from typing import Optional, Sequence

# Recommended maximum cache and object sizes.
MAX_CACHE_SIZE = 1049000
MAX_OBJECT_SIZE = 102400

USER_AGENT_HDR = (
    "User-Agent: Mozilla/5.0 (X11; Linux x86_64; rv:10.0.3) "
    "Gecko/20120305 Firefox/10.0.3\r\n"
)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print the User-Agent header the proxy sends."""
    sys.stdout.write(USER_AGENT_HDR)
    return 0


if __name__ == "__main__":
    sys.exit(main())