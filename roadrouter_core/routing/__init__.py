"""Routing module - Route registration, matching and dispatch."""

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

__all__ = [
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
]
