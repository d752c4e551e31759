"""aiohttp development server.

Serves every page on demand through a freshly built dispatcher, so edits
under the docs root show up on the next request. Nothing is written to disk.
"""

import logging

from aiohttp import web

from staticdocs.api.navigation import create_navigation_routes
from staticdocs.app_keys import site_key
from staticdocs.config import Config
from staticdocs.core.compiler import PUBLIC_DIR
from staticdocs.site import DocsSite

logger = logging.getLogger(__name__)


async def serve_page(request: web.Request) -> web.Response:
    """Dispatch the request path to the matching document."""
    site = request.app[site_key]
    response = site.dispatcher().dispatch(request.path, dict(request.query))
    logger.info(f"{request.method} {request.path} {response.status}")
    return web.Response(
        text=response.body,
        status=response.status,
        headers=response.headers,
    )


def create_app(config: Config) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration

    Returns:
        Configured aiohttp application
    """
    app = web.Application()
    site = DocsSite(config)
    app[site_key] = site

    # API routes (must be registered first to take precedence over pages)
    app.router.add_routes(create_navigation_routes())

    for asset_dir in config.asset_dirs:
        source = config.template_root / asset_dir
        if source.is_dir():
            app.router.add_static(f"/{PUBLIC_DIR}/{asset_dir}", source)

    # Page dispatch - must be last to catch all remaining paths
    app.router.add_get("/{path:.*}", serve_page)

    return app


def run_server(config: Config) -> None:
    """Run the development server."""
    app = create_app(config)
    web.run_app(app, host=config.server.host, port=config.server.port)
