# client.py
from __future__ import annotations

import asyncio
import sys
from typing import Dict, List

from fastmcp import Client

from passgen_settings import init_env, load_settings


def parse_args(argv: List[str]) -> Dict[str, str]:
    """Turn ["length=12", "numbers=true"] into an options map, values untouched."""
    options: Dict[str, str] = {}
    for arg in argv:
        key, sep, value = arg.partition("=")
        if not sep:
            raise ValueError(f"expected key=value, got {arg!r}")
        options[key] = value
    return options


async def request_password(url: str, options: Dict[str, str]) -> Dict[str, str]:
    async with Client(url) as c:
        result = await c.call_tool("generate_password", {"options": options})
        return result.structured_content or {}


def main(argv: List[str] | None = None) -> int:
    init_env()
    settings = load_settings()
    try:
        options = parse_args(sys.argv[1:] if argv is None else argv)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    out = asyncio.run(request_password(settings.server_url, options))
    if "error" in out:
        print(f"Error: {out['error']}")
        return 1
    password = out.get("password")
    if password is None:
        print("Error: server returned no password", file=sys.stderr)
        return 1
    print(password)
    return 0


if __name__ == "__main__":
    sys.exit(main())
