# password_server.py
from __future__ import annotations

from typing import Any, Dict

from fastmcp import FastMCP

from logging_middleware import RedactingLoggingMiddleware, configure_logging
from pass_generator import ALLOWED_OPTIONS, ALPHABETS, LOWERCASE_CLASS, generate
from passgen_settings import init_env, load_settings

# Initialize the MCP server
mcp = FastMCP("Password Generator")
mcp.add_middleware(RedactingLoggingMiddleware())


@mcp.tool
def generate_password(options: Dict[str, str]) -> Dict[str, str]:
    """
    Generate a random password from a string-keyed options map.

    Args:
      options: {"length": "<digits>"} plus any of "numbers", "uppercase",
        "symbols" set to "true" or "false". Lowercase letters are always used.

    Returns:
      {"password": "..."} on success, {"error": "..."} when the options are invalid.
    """
    return generate(options).to_dict()


@mcp.tool
def list_options() -> Dict[str, Any]:
    """List the option names accepted by generate_password and their alphabets."""
    return {
        "required": ["length"],
        "optional": list(ALLOWED_OPTIONS),
        "implicit": LOWERCASE_CLASS,
        "alphabets": dict(ALPHABETS),
    }


@mcp.resource("alphabet://{name}")
def alphabet_resource(name: str) -> dict:
    """Characters of one class (lowercase, numbers, uppercase, symbols)."""
    alphabet = ALPHABETS.get(name)
    if alphabet is None:
        return {"error": "not_found", "details": f"character class '{name}' not found"}
    return {"name": name, "alphabet": alphabet}


def main() -> None:
    init_env()
    settings = load_settings()
    log = configure_logging(settings.log_level, settings.log_file)
    if settings.transport == "http":
        log.info("starting MCP server at http://%s:%d/mcp", settings.host, settings.port)
        mcp.run(transport="http", host=settings.host, port=settings.port)
    else:
        # Start the MCP server (stdio transport by default)
        mcp.run()


if __name__ == "__main__":
    main()
