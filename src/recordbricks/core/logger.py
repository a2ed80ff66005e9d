import logging
import sys
import contextvars
from typing import Optional, TextIO

# Context variable to carry the current request id across the call chain
_REQUEST_ID: contextvars.ContextVar[str] = contextvars.ContextVar("request_id", default="-")


class _RequestIdFilter(logging.Filter):
    """Logging filter that injects the request_id from contextvars into the record."""

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.request_id = _REQUEST_ID.get()
        return True


def _build_formatter() -> logging.Formatter:
    return logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | req=%(request_id)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


def configure_root_logger(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """
    Configure root logger and recordbricks-specific logger.

    Root logger stays at INFO to suppress library noise (httpx, httpcore).
    Only recordbricks namespace logs are set to the requested level.

    Args:
        level: Log level for recordbricks logs (DEBUG, INFO, WARNING, ERROR).
               Other libraries stay at INFO.
        stream: Where log lines go. Defaults to stdout; command-line tools pass
                stderr so stdout carries only their output. Passing a different
                stream than the configured one replaces the handler.

    Safe to call multiple times; it will not duplicate handlers (idempotent).
    """
    root = logging.getLogger()

    for h in list(root.handlers):
        if isinstance(h, logging.StreamHandler) and any(isinstance(f, _RequestIdFilter) for f in h.filters):
            if stream is None or h.stream is stream:
                logging.getLogger("recordbricks").setLevel(_level(level))
                return
            root.removeHandler(h)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(_build_formatter())
    handler.addFilter(_RequestIdFilter())
    root.addHandler(handler)
    root.setLevel(logging.INFO)

    logging.getLogger("recordbricks").setLevel(_level(level))


def get_logger(name: str = "recordbricks") -> logging.Logger:
    """
    Get a module-specific logger.

    Handlers live on the root logger (see ``configure_root_logger``); the
    returned logger only propagates, so library users keep control of output.
    """
    return logging.getLogger(name)


def push_request_id(request_id: Optional[str]) -> Optional[contextvars.Token]:
    """Set the current request id in context and return a token for later reset."""
    if not request_id:
        return None
    return _REQUEST_ID.set(request_id)


def reset_request_id(token: Optional[contextvars.Token]) -> None:
    """Reset the request id context using the provided token (if any)."""
    if token is None:
        return
    _REQUEST_ID.reset(token)


def current_request_id() -> str:
    return _REQUEST_ID.get()
