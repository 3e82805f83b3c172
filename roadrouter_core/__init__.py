"""RoadRouter - Hash-based client-side router.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

RoadRouter provides a small navigation router with:
- Path templates with named parameters (/users/:id)
- Every matching route contributing its handlers, in registration order
- Handler chains driven by an explicit ``next`` continuation
- Suppression of repeated navigation to the same resolved path
- Pluggable location source (browser, in-memory)

Architecture Overview:
┌─────────────────────────────────────────────────────────────────────────────┐
│                              RoadRouter                                      │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                              │
│  ┌───────────────────────────────────────────────────────────────────────┐  │
│  │                        Navigation Flow                                 │  │
│  │  Location ──▶ handle_routes ──▶ find ──▶ HandlerChain ──▶ Handlers    │  │
│  └───────────────────────────────────────────────────────────────────────┘  │
│                                                                              │
│  ┌─────────────────┐  ┌─────────────────┐  ┌─────────────────────────────┐ │
│  │    Routing      │  │    Handlers     │  │        Navigation           │ │
│  │                 │  │                 │  │                             │ │
│  │ - Router        │  │ - Context       │  │ - NavigationAdapter         │ │
│  │ - Route table   │  │ - HandlerChain  │  │ - MemoryNavigation          │ │
│  │ - Guard         │  │ - Logging       │  │ - Hash change listeners     │ │
│  │ - Patterns      │  │                 │  │                             │ │
│  └─────────────────┘  └─────────────────┘  └─────────────────────────────┘ │
│                                                                              │
└─────────────────────────────────────────────────────────────────────────────┘

Navigation Flow:
1. Location hash changes (or start() is called)
2. Non-hash locations are rewritten to their hash form
3. Every route matching the url contributes a guard plus its handlers
4. The first handler runs; each handler calls next() to continue
5. A guard stops the chain when the resolved path has not changed

Usage:
    from roadrouter_core import Router

    router = Router()

    def show_user(ctx, next):
        print("user", ctx.params["id"])

    router.use("/users/:id", show_user)
    router.start()

    router.redirect("/users/42")
"""

__version__ = "0.1.0"
__author__ = "BlackRoad OS, Inc."

# Routing
from roadrouter_core.routing.router import Router, Route, Resolution
from roadrouter_core.routing.matcher import (
    PatternCompiler,
    CompiledPattern,
    Key,
    InvalidPatternError,
    ParameterError,
    compile_pattern,
    compile_path,
)

# Handlers
from roadrouter_core.handlers.base import Context, Handler, HandlerChain
from roadrouter_core.handlers.logging import LoggingHandler, LoggingConfig

# Navigation
from roadrouter_core.navigation.adapter import NavigationAdapter, MemoryNavigation

# Utils
from roadrouter_core.utils.config import RouterConfig, configure_logging

__all__ = [
    # Version
    "__version__",
    # Routing
    "Router",
    "Route",
    "Resolution",
    "PatternCompiler",
    "CompiledPattern",
    "Key",
    "InvalidPatternError",
    "ParameterError",
    "compile_pattern",
    "compile_path",
    # Handlers
    "Context",
    "Handler",
    "HandlerChain",
    "LoggingHandler",
    "LoggingConfig",
    # Navigation
    "NavigationAdapter",
    "MemoryNavigation",
    # Utils
    "RouterConfig",
    "configure_logging",
]
