"""Router - Hash navigation routing engine.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from roadrouter_core.handlers.base import Context, Handler, HandlerChain, Parameters
from roadrouter_core.navigation.adapter import MemoryNavigation, NavigationAdapter
from roadrouter_core.routing.matcher import (
    CompiledPattern,
    InvalidPatternError,
    Key,
    PatternCompiler,
)
from roadrouter_core.utils.config import RouterConfig
from roadrouter_core.utils.helpers import hash_to_url, path_to_hash_href

logger = logging.getLogger(__name__)

CATCH_ALL = "(.*)"


@dataclass(frozen=True)
class Route:
    """Registered route."""

    path: str
    pattern: CompiledPattern
    keys: Tuple[Key, ...] = ()
    handlers: Tuple[Handler, ...] = ()
    base: str = ""


@dataclass
class Resolution:
    """Handlers and parameters gathered for a url."""

    params: Parameters = field(default_factory=dict)
    handlers: List[Handler] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.handlers)


class Router:
    """Hash Router.

    Features:
    - Pattern-based routing (/users/:id, /files(.*))
    - Every matching route contributes its handlers, in registration order
    - Handlers chained through an explicit ``next`` continuation
    - Re-navigation to the same resolved path is suppressed

    Usage:
        router = Router()
        router.use("/", home)
        router.use("/users/:id", load_user, show_user)
        router.start()

        router.redirect("/users/7")
    """

    def __init__(
        self,
        base: Optional[str] = None,
        adapter: Optional[NavigationAdapter] = None,
        config: Optional[Union[RouterConfig, Dict[str, Any]]] = None,
        compiler: Optional[PatternCompiler] = None,
    ):
        if isinstance(config, dict):
            config = RouterConfig.from_dict(config)
        self.config = config or RouterConfig()
        if base is not None:
            self.config = self.config.merge({"base": base})
        self.adapter = adapter or MemoryNavigation()
        self.compiler = compiler or PatternCompiler(
            sensitive=self.config.sensitive,
            strict=self.config.strict,
            end=self.config.end,
        )
        self._base = self.config.base
        self._last_path: Optional[str] = None
        self._routes: List[Route] = []

    def base(self, path: str) -> None:
        """Set base path for subsequently registered routes."""
        self._base = path

    @property
    def last_path(self) -> Optional[str]:
        """Most recent concrete path navigated to."""
        return self._last_path

    @property
    def routes(self) -> List[Route]:
        """Get all routes."""
        return self._routes.copy()

    def use(self, path: str, *handlers: Handler) -> "Router":
        """Register a route.

        Args:
            path: Route path template
            handlers: Handlers executed, in order, when the route matches

        Invalid templates are logged and skipped.
        """
        full_path = path if self._base == "/" else self._base + path
        base = full_path.split(CATCH_ALL)[0]

        try:
            pattern = self.compiler.compile(full_path)
        except InvalidPatternError as e:
            logger.error(f"Route '{path}' is invalid: {e}")
            return self

        # Guards render the base on its own
        try:
            self.compiler.to_path(base)
        except InvalidPatternError as e:
            logger.error(
                f"Route '{path}' is invalid: base '{base}' cannot be rendered: {e}"
            )
            return self

        self._routes.append(Route(
            path=full_path,
            pattern=pattern,
            keys=tuple(pattern.keys),
            handlers=tuple(handlers),
            base=base,
        ))
        logger.debug(f"Registered route '{full_path}' ({len(handlers)} handlers)")

        return self

    def find(self, url: str) -> Resolution:
        """Gather params and handlers of every route matching url.

        Routes are scanned in registration order. Each matching route adds
        a guard handler followed by its own handlers. When several matching
        routes share a parameter name, the later route's value wins.

        Returns:
            Resolution, empty if nothing matched
        """
        resolution = Resolution()

        for route in self._routes:
            if not route.pattern.test(url):
                continue

            resolution.handlers.append(self._guard(route))

            if route.keys:
                captures = route.pattern.exec(url)
                if captures:
                    for key, value in zip(route.keys, captures):
                        if value is not None:
                            resolution.params[key.name] = value

            resolution.handlers.extend(route.handlers)

        return resolution

    def _guard(self, route: Route) -> Handler:
        """Build the handler that stops re-execution for an unchanged path."""
        to_path = self.compiler.to_path(route.base)

        def guard(
            ctx: Optional[Context] = None,
            next: Optional[Callable[[], Any]] = None,
        ) -> None:
            if ctx is None or next is None:
                return

            path = to_path(ctx.params)
            if self._last_path != path:
                self._last_path = path
                next()
            else:
                logger.debug(f"Already at '{path}', skipping '{route.path}'")

        return guard

    def handle_routes(self) -> None:
        """Dispatch the current location.

        1. Redirects any non-hash location to its hash-based form.
        2. Finds matching handlers.
        3. Runs the first handler with a reference to the next one.
        """
        pathname = self.adapter.pathname
        if pathname != self.config.root:
            self.adapter.set_href(
                path_to_hash_href(
                    pathname,
                    root=self.config.root,
                    prefix=self.config.hash_prefix,
                )
            )

        url = hash_to_url(self.adapter.hash, prefix=self.config.hash_prefix)
        resolution = self.find(url)

        if not resolution.handlers:
            return

        logger.debug(f"Dispatching '{url}' ({len(resolution.handlers)} handlers)")
        chain = HandlerChain(
            resolution.handlers,
            Context(params=resolution.params, path=url),
        )
        chain.run()

    def start(self) -> None:
        """Dispatch the current location and listen for changes.

        Changes made during the first dispatch (a redirect on load) are
        delivered once the listener is attached.
        """
        with self.adapter.deferred():
            self.handle_routes()
            self.adapter.add_listener(self.handle_routes)
        logger.debug("Router started")

    def stop(self) -> None:
        """Stop listening for location changes."""
        self.adapter.remove_listener(self.handle_routes)
        logger.debug("Router stopped")

    def redirect(self, path: str) -> None:
        """Navigate to path."""
        self.adapter.set_hash(path)

    def __len__(self) -> int:
        return len(self._routes)


__all__ = [
    "Router",
    "Route",
    "Resolution",
]
