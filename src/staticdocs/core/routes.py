"""URL routes for Markdown documents.

Each document maps to exactly one endpoint:

    index.md          -> /
    guide.md          -> /guide
    topics/index.md   -> /topics
    topics/setup.md   -> /topics/setup
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from staticdocs.core.files import DocumentFileProvider
from staticdocs.core.types import URLPath

if TYPE_CHECKING:
    from staticdocs.core.dispatcher import Request, Response


class Handler(Protocol):
    """Produces the response for a matched route."""

    def __call__(self, route: "Route", request: "Request") -> "Response": ...


@dataclass(frozen=True)
class Route:
    """Endpoint paired with the handler producing its content.

    ``source`` is the markdown file the route was resolved from, if any.
    """

    endpoint: URLPath
    handler: Handler
    source: Path | None = None


def normalize_endpoint(endpoint: str) -> URLPath:
    """Strip surrounding slashes and prepend exactly one.

    ``""``, ``"/"`` and ``"//"`` all normalize to the root ``"/"``.
    """
    return URLPath("/" + endpoint.strip("/"))


def derive_endpoint(relative_dir: Iterable[str], name: str) -> URLPath:
    """Derive the endpoint of a document.

    Args:
        relative_dir: Directory segments relative to the docs root
        name: File base name without the .md extension

    Returns:
        Normalized endpoint
    """
    directory = "/".join(relative_dir)
    if name == "index":
        endpoint = f"/{directory}"
    elif directory:
        endpoint = f"/{directory}/{name}"
    else:
        endpoint = f"/{name}"
    return normalize_endpoint(endpoint)


class RouteResolver:
    """Resolves documents into routes, in enumeration order."""

    def __init__(self, provider: DocumentFileProvider, handler: Handler) -> None:
        self._provider = provider
        self._handler = handler

    @property
    def provider(self) -> DocumentFileProvider:
        return self._provider

    def iter_routes(self) -> Iterator[Route]:
        """Lazily yield one route per document.

        Raises:
            RootNotFoundError: If the docs root does not exist
        """
        files = self._provider.iter_files()
        return (
            Route(
                endpoint=derive_endpoint(document.relative_dir, document.name),
                handler=self._handler,
                source=document.path,
            )
            for document in files
        )

    def routes(self) -> list[Route]:
        """Resolve all routes in one full pass."""
        return list(self.iter_routes())
