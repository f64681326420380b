"""A minimal CGI program that adds two numbers from the query string."""

from __future__ import annotations

import os
import re
import sys
from typing import Optional, Sequence

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def atoi(text: str) -> int:
    """Parse the leading integer of ``text``; 0 if there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def render(query_string: Optional[str]) -> str:
    """Build the CGI response for a query string of the form ``a&b``."""
    n1 = n2 = 0
    if query_string is not None:
        if "&" not in query_string:
            raise ValueError("query string must hold two arguments separated by '&'")
        arg1, arg2 = query_string.split("&", 1)
        n1, n2 = atoi(arg1), atoi(arg2)

    content = (
        "Welcome to add.com: "
        "THE Internet addition portal.\r\n<p>"
        f"The answer is: {n1} + {n2} = {n1 + n2}\r\n<p>"
        "Thanks for visiting!\r\n"
    )
    return (
        "Connection: close\r\n"
        f"Content-length: {len(content)}\r\n"
        "Content-type: text/html\r\n\r\n"
        f"{content}"
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Write the response for the ``QUERY_STRING`` environment variable."""
    sys.stdout.write(render(os.environ.get("QUERY_STRING")))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())