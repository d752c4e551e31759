"""Application keys for type-safe app configuration access."""

from aiohttp import web

from staticdocs.site import DocsSite

site_key = web.AppKey("site", DocsSite)
