# logging_middleware.py
from __future__ import annotations

import json
import logging
import sys
from typing import Any, Dict

from fastmcp.server.middleware import Middleware, MiddlewareContext

log = logging.getLogger("passgen")

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
MASK = "***MASKED***"

_STDERR_HANDLER = "passgen-stderr"


def configure_logging(level: str = "INFO", log_file: str = "") -> logging.Logger:
    """
    Set the passgen logger level and attach its handlers.

    The stderr handler is added once; stdout is left alone because it carries
    the stdio transport. Each distinct `log_file` gets its own FileHandler,
    also only once, so repeated calls are safe.
    """
    log.setLevel(getattr(logging, level.upper(), logging.INFO))
    names = {h.get_name() for h in log.handlers}
    fmt = logging.Formatter(LOG_FORMAT, LOG_DATEFMT)

    if _STDERR_HANDLER not in names:
        eh = logging.StreamHandler(sys.stderr)
        eh.set_name(_STDERR_HANDLER)
        eh.setFormatter(fmt)
        log.addHandler(eh)

    file_handler = f"passgen-file:{log_file}"
    if log_file and file_handler not in names:
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.set_name(file_handler)
        fh.setFormatter(fmt)
        log.addHandler(fh)
    return log


def safe_json(obj: Any) -> str:
    """JSON for log lines; anything json can't take is rendered with str()."""
    try:
        return json.dumps(obj, default=str, ensure_ascii=False, sort_keys=True)
    except (TypeError, ValueError):
        return f"<unserializable {type(obj).__name__}>"


def unwrap_result(obj: Any) -> Any:
    """Pull the structured payload out of a tool result when there is one."""
    for attr in ("structured_content", "data"):
        inner = getattr(obj, attr, None)
        if isinstance(inner, (dict, list)):
            return inner
    if hasattr(obj, "model_dump"):
        return obj.model_dump()
    return obj


def redact(obj: Any, keys=frozenset({"password", "secret", "token", "api_key", "authorization"})) -> Any:
    """Copy of `obj` with the values of sensitive keys replaced by MASK."""
    if isinstance(obj, dict):
        out: Dict[str, Any] = {}
        for k, v in obj.items():
            out[k] = MASK if str(k).lower() in keys else redact(v, keys)
        return out
    if isinstance(obj, list):
        return [redact(x, keys) for x in obj]
    if isinstance(obj, str) and obj.lstrip().startswith(("{", "[")):
        # text content parts carry the tool result as a JSON string
        try:
            parsed = json.loads(obj)
        except ValueError:
            return obj
        return json.dumps(redact(parsed, keys), ensure_ascii=False)
    return obj


class RedactingLoggingMiddleware(Middleware):
    """Log each MCP request and its response with passwords masked."""

    def _trace(self, label: str, method: str, payload: Any) -> None:
        try:
            log.info("%s %s: %s", label, method, safe_json(redact(unwrap_result(payload))))
        except Exception as e:
            # a log line must never fail the request it describes
            print(f"[passgen] could not log {label} {method}: {e}", file=sys.stderr, flush=True)

    async def on_message(self, context: MiddlewareContext, call_next):
        self._trace("request", context.method, getattr(context, "message", None))

        result = await call_next(context)

        self._trace("response", context.method, result)
        return result
