"""
Misc Views
-------------------------

Routes outside the api root.
"""
from aiohttp import web

from ridegate.config import api_root
from ridegate.version import __version__, name


async def index(request):
    """Tells whoever asks what is running here."""
    return web.json_response({"name": name, "version": __version__, "api": api_root})
