"""Component wiring.

Builds the collaborators of the compiler from a Config: the document
provider, route resolver, navigation builder, renderers and handler.
"""

from collections.abc import Iterable
from pathlib import Path

from staticdocs.config import Config
from staticdocs.core.compiler import CompileContext, CompileOrchestrator
from staticdocs.core.dispatcher import RequestDispatcher, Response
from staticdocs.core.files import DocumentFileProvider
from staticdocs.core.handler import MarkdownHandler
from staticdocs.core.navigation import NavigationTreeBuilder
from staticdocs.core.renderer import MarkdownRenderer, TemplateRenderer
from staticdocs.core.routes import Route, RouteResolver


class DocsSite:
    """Documentation site assembled from configuration."""

    def __init__(self, config: Config) -> None:
        self._config = config
        self.provider = DocumentFileProvider(config.docs_root)
        self.navigation = NavigationTreeBuilder(self.provider)
        self.templates = TemplateRenderer(config.template_root)
        self.handler = MarkdownHandler(
            config.docs_root,
            MarkdownRenderer(),
            self.templates,
            self.navigation,
        )
        self.resolver = RouteResolver(self.provider, self.handler)

    @property
    def config(self) -> Config:
        return self._config

    def dispatcher(self, routes: Iterable[Route] | None = None) -> RequestDispatcher:
        """Build a dispatcher over the given routes, or a freshly resolved table."""
        if routes is None:
            routes = self.resolver.iter_routes()
        return RequestDispatcher(routes, self.navigation, self.templates)

    def handle(self, path: str) -> Response:
        """Serve a single request against a fresh route table."""
        return self.dispatcher().dispatch(path)

    def compiler(self, output_dir: Path | None = None) -> CompileOrchestrator:
        context = CompileContext(
            output_dir=output_dir if output_dir is not None else self._config.output_dir,
            template_root=self._config.template_root,
            asset_dirs=tuple(self._config.asset_dirs),
        )
        return CompileOrchestrator(context, self.resolver, self.dispatcher)
