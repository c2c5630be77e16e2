"""ASGI entrypoint for the scan engine API."""

from scan_engine.api.app import create_app
from scan_engine.containers import build_container

app = create_app(build_container())
