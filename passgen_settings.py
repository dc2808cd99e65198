# passgen_settings.py
from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass
from typing import Literal

from dotenv import load_dotenv, find_dotenv

Transport = Literal["stdio", "http"]


# Load environment variables from a .env file if present.
# Search from the current working directory upward; if not found, try the script directory.
def init_env() -> bool:
    try:
        dotenv_path = find_dotenv(usecwd=True)
    except OSError:
        dotenv_path = ""
    loaded = False
    if dotenv_path:
        loaded = load_dotenv(dotenv_path)
    if not loaded:
        # Fallback to a .env next to this file (works if MCP changes CWD)
        script_env = pathlib.Path(__file__).resolve().parent / ".env"
        if script_env.exists():
            loaded = load_dotenv(script_env)
    return loaded


@dataclass
class Settings:
    transport: Transport = "stdio"
    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    log_file: str = ""
    server_url: str = "http://127.0.0.1:8000/mcp"


def load_settings() -> Settings:
    """Read PASSGEN_* variables, falling back to the Settings defaults."""
    defaults = Settings()

    transport = os.getenv("PASSGEN_TRANSPORT", defaults.transport).strip().lower()
    if transport not in ("stdio", "http"):
        raise ValueError("PASSGEN_TRANSPORT must be 'stdio' or 'http'")

    raw_port = os.getenv("PASSGEN_PORT", str(defaults.port)).strip()
    try:
        port = int(raw_port)
    except ValueError:
        raise ValueError(f"PASSGEN_PORT must be an integer, got {raw_port!r}")
    if not (0 < port < 65536):
        raise ValueError("PASSGEN_PORT must be between 1 and 65535")

    return Settings(
        transport=transport,  # type: ignore[arg-type]
        host=os.getenv("PASSGEN_HOST", defaults.host),
        port=port,
        log_level=os.getenv("PASSGEN_LOG_LEVEL", defaults.log_level).upper(),
        log_file=os.getenv("PASSGEN_LOG_FILE", defaults.log_file),
        server_url=os.getenv("PASSGEN_SERVER_URL", defaults.server_url),
    )
