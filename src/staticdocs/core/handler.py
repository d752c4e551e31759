"""Content handler for markdown routes."""

import logging
from pathlib import Path

from staticdocs.core.dispatcher import Request, Response
from staticdocs.core.navigation import NavigationTreeBuilder
from staticdocs.core.renderer import MarkdownRenderer, TemplateRenderer, mark_safe
from staticdocs.core.routes import Route

logger = logging.getLogger(__name__)


class MarkdownHandler:
    """Renders the markdown document behind a route into the "doc" template."""

    def __init__(
        self,
        docs_root: Path,
        markdown: MarkdownRenderer,
        templates: TemplateRenderer,
        navigation: NavigationTreeBuilder,
    ) -> None:
        self._docs_root = docs_root
        self._markdown = markdown
        self._templates = templates
        self._navigation = navigation

    def __call__(self, route: Route, request: Request) -> Response:
        source_path = route.source
        if source_path is None:
            source_path = self.resolve_source_path(route.endpoint)
        if source_path is None or not source_path.is_file():
            logger.warning(f"Source file for {route.endpoint} not found")
            return Response(status=404)

        document = self._markdown.render_file(source_path)
        body = self._templates.render(
            "doc",
            {
                "content": mark_safe(document.html),
                "title": document.title,
                "toc": document.toc,
                "front_matter": document.front_matter,
                "sidebar_items": self._navigation.build(route.endpoint),
                "current_path": route.endpoint,
                "params": request.params,
            },
        )
        return Response(body=body)

    def resolve_source_path(self, endpoint: str) -> Path | None:
        """Map an endpoint back to its markdown file.

        "/guide" resolves to guide.md, falling back to guide/index.md.

        Returns:
            Path to the source file, None if neither exists
        """
        path = endpoint.strip("/")
        if path:
            source_path = self._docs_root / f"{path}.md"
            if source_path.is_file():
                return source_path

        index_path = self._docs_root / path / "index.md"
        if index_path.is_file():
            return index_path
        return None
