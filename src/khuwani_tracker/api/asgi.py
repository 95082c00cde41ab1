"""ASGI entrypoint for the khuwani tracker API."""

from khuwani_tracker.api.app import create_app
from khuwani_tracker.containers import build_container

app = create_app(build_container())
