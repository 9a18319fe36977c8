"""Application keys for type-safe app configuration access."""

from aiohttp import web

from plainwiki.core.pages import PageStore
from plainwiki.core.renderer import Renderer
from plainwiki.core.routing import Router
from plainwiki.core.sessions import SessionStore

page_store_key = web.AppKey("page_store", PageStore)
router_key = web.AppKey("router", Router)
renderer_key = web.AppKey("renderer", Renderer)
wiki_title_key = web.AppKey("wiki_title", str)
session_store_key = web.AppKey("session_store", SessionStore)
