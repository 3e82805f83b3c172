"""Handlers module - Navigation handlers and chaining."""

from roadrouter_core.handlers.base import (
    Context,
    Handler,
    HandlerChain,
    Parameters,
    call_handler,
)
from roadrouter_core.handlers.logging import LoggingHandler, LoggingConfig

__all__ = [
    "Context",
    "Handler",
    "HandlerChain",
    "Parameters",
    "call_handler",
    "LoggingHandler",
    "LoggingConfig",
]
