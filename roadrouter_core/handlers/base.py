"""Handler Base - Navigation handlers and chained execution.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

logger = logging.getLogger(__name__)

Parameters = Dict[str, Union[str, int]]


@dataclass
class Context:
    """Navigation context passed to every handler."""

    params: Parameters = field(default_factory=dict)
    path: str = ""
    state: Dict[str, Any] = field(default_factory=dict)


# handler(ctx=None, next=None); zero- and one-argument callables are accepted too
Handler = Callable[..., Any]


def _positional_arity(handler: Handler) -> int:
    """Count how many of (ctx, next) a handler accepts."""
    try:
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        return 2

    count = 0
    for param in sig.parameters.values():
        if param.kind == inspect.Parameter.VAR_POSITIONAL:
            return 2
        if param.kind in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
        ):
            count += 1
    return min(count, 2)


def call_handler(
    handler: Handler,
    ctx: Optional[Context] = None,
    next: Optional[Callable[[], Any]] = None,
) -> Any:
    """Invoke a handler with as many of (ctx, next) as it accepts.

    Handlers may accept zero, one (ctx), or two (ctx, next) args.
    """
    arity = _positional_arity(handler)

    if arity >= 2:
        return handler(ctx, next)
    if arity == 1:
        return handler(ctx)
    return handler()


class HandlerChain:
    """Cooperative continuation-passing execution of handlers.

    Each handler receives the shared context and a ``next`` continuation;
    the chain only advances when a handler calls ``next``.

    Pipeline:
    ┌────────────────────────────────────────────────────────────┐
    │                    Handler Chain                            │
    │                                                             │
    │  run() ──▶ H1(ctx, next) ──▶ H2(ctx, next) ──▶ ... ──▶ Hn  │
    │                 │                                           │
    │                 └── not calling next halts the chain        │
    └────────────────────────────────────────────────────────────┘

    Usage:
        chain = HandlerChain([auth, render], Context(params={"id": "7"}))
        chain.run()
    """

    def __init__(
        self,
        handlers: Optional[List[Handler]] = None,
        context: Optional[Context] = None,
    ):
        self._handlers = list(handlers or [])
        self.context = context or Context()
        self._cursor = 0

    def add(self, handler: Handler) -> "HandlerChain":
        """Add handler to chain."""
        self._handlers.append(handler)
        return self

    @property
    def cursor(self) -> int:
        """Index of the next handler to run."""
        return self._cursor

    @property
    def finished(self) -> bool:
        """Check if every handler has been invoked."""
        return self._cursor >= len(self._handlers)

    def next(self) -> None:
        """Invoke the handler under the cursor and advance."""
        if self.finished:
            return

        handler = self._handlers[self._cursor]
        self._cursor += 1
        call_handler(handler, self.context, self.next)

    def run(self) -> None:
        """Start execution from the first handler."""
        if not self._handlers:
            return
        self._cursor = 0
        self.next()

    def __len__(self) -> int:
        return len(self._handlers)


__all__ = [
    "Context",
    "Handler",
    "Parameters",
    "HandlerChain",
    "call_handler",
]
