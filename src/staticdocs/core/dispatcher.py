"""Request dispatching.

Matches a request path against the route table. Only literal endpoints are
supported; a path without a route gets the not-found page.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from staticdocs.core.navigation import NavigationTreeBuilder
from staticdocs.core.renderer import TemplateRenderer
from staticdocs.core.routes import Route, normalize_endpoint
from staticdocs.core.types import URLPath

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html; charset=utf-8"


def _default_headers() -> dict[str, str]:
    return {"Content-Type": HTML_CONTENT_TYPE}


@dataclass(frozen=True)
class Request:
    """Incoming request with its parameters frozen at dispatch time."""

    path: URLPath
    params: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))


@dataclass
class Response:
    """Rendered response."""

    body: str = ""
    status: int = 200
    headers: dict[str, str] = field(default_factory=_default_headers)

    @property
    def ok(self) -> bool:
        return self.status < 400


class RequestDispatcher:
    """Dispatches request paths to route handlers.

    The route table is built once, from the routes passed in. Callers build a
    new dispatcher for every compile pass or served request.
    """

    def __init__(
        self,
        routes: Iterable[Route],
        navigation: NavigationTreeBuilder,
        templates: TemplateRenderer,
    ) -> None:
        self._navigation = navigation
        self._templates = templates
        self._routes: dict[URLPath, Route] = {}
        for route in routes:
            if route.endpoint in self._routes:
                logger.warning(f"Duplicate endpoint {route.endpoint}, the later document wins")
            self._routes[route.endpoint] = route

    @property
    def endpoints(self) -> list[URLPath]:
        return list(self._routes)

    def match(self, path: str) -> Route | None:
        return self._routes.get(normalize_endpoint(path))

    def dispatch(self, path: str, params: Mapping[str, str] | None = None) -> Response:
        """Produce the response for a request path.

        Args:
            path: Request path, e.g. "/guide" or "guide/"
            params: Request parameters, copied into the request

        Returns:
            The handler's response, or a 404 response if no route matches
        """
        endpoint = normalize_endpoint(path)
        route = self._routes.get(endpoint)
        if route is None:
            logger.debug(f"No route for {endpoint}")
            return self.not_found()

        request = Request(path=endpoint, params=MappingProxyType(dict(params or {})))
        return route.handler(route, request)

    def not_found(self) -> Response:
        """Render the not-found page with a fully closed sidebar."""
        body = self._templates.render(
            "404",
            {"sidebar_items": self._navigation.build(None), "current_path": ""},
        )
        return Response(body=body, status=404)
