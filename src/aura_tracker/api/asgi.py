"""ASGI entrypoint for the aura tracker API."""

from aura_tracker.api.app import create_app
from aura_tracker.containers import build_container

app = create_app(build_container())
