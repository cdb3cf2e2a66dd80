"""ASGI entry point: ``uvicorn main:app --port 9000``.

The role and the rest of the configuration come from ``PODTATO_*``
environment variables. ``python cli.py serve`` offers the same with flags.
"""
from podtato.logs import configure_logging
from podtato.server import create_app
from podtato.settings import settings

configure_logging(settings.log_level)

app = create_app(settings)
