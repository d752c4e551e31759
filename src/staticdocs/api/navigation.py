"""Navigation API endpoint.

Returns the sidebar tree as JSON, opened towards the ``current`` query
parameter when given.
"""

from aiohttp import web

from staticdocs.app_keys import site_key
from staticdocs.core.routes import normalize_endpoint


def create_navigation_routes() -> list[web.RouteDef]:
    return [web.get("/api/navigation", get_navigation)]


async def get_navigation(request: web.Request) -> web.Response:
    site = request.app[site_key]
    current = request.query.get("current")
    nav_items = site.navigation.build(normalize_endpoint(current) if current else None)
    return web.json_response({"items": [item.to_dict() for item in nav_items]})
