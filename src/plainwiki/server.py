"""aiohttp server for plainwiki.

Application factory and route registration.
"""

import logging

from aiohttp import web

from plainwiki.api.pages import create_pages_routes
from plainwiki.app_keys import (
    page_store_key,
    renderer_key,
    router_key,
    session_store_key,
    wiki_title_key,
)
from plainwiki.config import Config
from plainwiki.core.pages import PageStore
from plainwiki.core.renderer import Renderer
from plainwiki.core.routing import Router
from plainwiki.core.sessions import SessionStore

logger = logging.getLogger(__name__)


def create_app(
    config: Config,
    *,
    session_store: SessionStore | None = None,
) -> web.Application:
    """Create aiohttp application.

    Args:
        config: Application configuration
        session_store: Connected session store, if sessions are enabled

    Returns:
        Configured aiohttp application
    """
    app = web.Application()

    app[page_store_key] = PageStore(config.wiki.pages_dir)
    app[router_key] = Router()
    app[renderer_key] = Renderer(config.wiki.template_dir)
    app[wiki_title_key] = config.wiki.title
    if session_store is not None:
        app[session_store_key] = session_store

    app.router.add_routes(create_pages_routes())

    images_dir = config.wiki.images_dir
    if images_dir.is_dir():
        app.router.add_static("/images", images_dir)
    else:
        logger.debug(f"Images directory {images_dir} not found, /images disabled")

    return app


def run_server(
    config: Config,
    *,
    session_store: SessionStore | None = None,
) -> None:
    """Run the server.

    Args:
        config: Application configuration
        session_store: Connected session store, if sessions are enabled
    """
    app = create_app(config, session_store=session_store)
    web.run_app(app, host=config.server.host, port=config.server.port)
