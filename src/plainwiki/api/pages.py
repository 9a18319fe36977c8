"""Page endpoints.

Handles the index listing and the view, edit and save operations on a single
page. Every page path is checked against the router grammar before any
storage access.
"""

import logging
from collections.abc import Awaitable, Callable

from aiohttp import web
from jinja2 import TemplateError

from plainwiki.app_keys import page_store_key, renderer_key, router_key, wiki_title_key
from plainwiki.core.pages import IndexPage, Page, PageNotFoundError
from plainwiki.core.routing import Operation
from plainwiki.core.types import PageTitle

logger = logging.getLogger(__name__)

PageHandler = Callable[[web.Request, PageTitle], Awaitable[web.StreamResponse]]


def create_pages_routes() -> list[web.RouteDef]:
    return [
        web.get("/", index),
        web.get("/view/{title:.*}", page_route(Operation.VIEW, view_page)),
        web.get("/edit/{title:.*}", page_route(Operation.EDIT, edit_page)),
        web.route("*", "/save/{title:.*}", page_route(Operation.SAVE, save_page)),
    ]


def page_route(
    operation: Operation,
    handler: PageHandler,
) -> Callable[[web.Request], Awaitable[web.StreamResponse]]:
    """Wrap a page handler with path validation.

    The wrapped handler only runs for paths matching the router grammar for
    ``operation``; anything else is answered with 404.
    """

    async def validated(request: web.Request) -> web.StreamResponse:
        route = request.app[router_key].validate(request.path)
        if route is None or route.operation is not operation:
            raise web.HTTPNotFound()
        return await handler(request, route.title)

    return validated


async def index(request: web.Request) -> web.Response:
    store = request.app[page_store_key]
    try:
        titles = store.list_titles()
    except OSError as e:
        logger.error(f"Failed to list pages in {store.pages_dir}: {e}")
        return _internal_error(e)

    return _render(
        request,
        lambda renderer: renderer.render_index(
            IndexPage(title=request.app[wiki_title_key], titles=titles),
        ),
    )


async def view_page(request: web.Request, title: PageTitle) -> web.Response:
    store = request.app[page_store_key]
    try:
        page = store.load(title)
    except PageNotFoundError:
        logger.debug(f"Page {title} not found, redirecting to editor")
        raise web.HTTPFound(request.app[router_key].url_for(Operation.EDIT, title))
    except OSError as e:
        logger.error(f"Failed to read page {title}: {e}")
        return _internal_error(e)

    return _render(request, lambda renderer: renderer.render_view(page))


async def edit_page(request: web.Request, title: PageTitle) -> web.Response:
    store = request.app[page_store_key]
    try:
        page = store.load(title)
    except PageNotFoundError:
        page = Page(title=title)
    except OSError as e:
        logger.error(f"Failed to read page {title}: {e}")
        return _internal_error(e)

    return _render(request, lambda renderer: renderer.render_edit(page))


async def save_page(request: web.Request, title: PageTitle) -> web.Response:
    if request.method != "POST":
        raise web.HTTPNotFound()

    form = await request.post()
    body = form.get("body", "")
    if not isinstance(body, str):
        raise web.HTTPBadRequest(text="body must be a text field")

    store = request.app[page_store_key]
    try:
        store.save(Page(title=title, body=body.encode("utf-8")))
    except OSError as e:
        logger.error(f"Failed to save page {title}: {e}")
        return _internal_error(e)

    logger.info(f"Saved page {title}")
    raise web.HTTPFound(request.app[router_key].url_for(Operation.VIEW, title))


def _render(request: web.Request, render: Callable[..., str]) -> web.Response:
    try:
        html = render(request.app[renderer_key])
    except TemplateError as e:
        logger.error(f"Failed to render {request.path}: {e}")
        return _internal_error(e)
    return web.Response(text=html, content_type="text/html")


def _internal_error(error: Exception) -> web.Response:
    return web.Response(status=500, text=str(error))
