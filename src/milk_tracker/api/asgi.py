"""ASGI entrypoint for the milk tracker API."""

from milk_tracker.api.app import create_app
from milk_tracker.containers import build_container

app = create_app(build_container())
