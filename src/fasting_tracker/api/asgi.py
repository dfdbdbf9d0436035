"""ASGI entrypoint for the fasting tracker API."""

from fasting_tracker.api.app import create_app
from fasting_tracker.containers import build_container

app = create_app(build_container())
