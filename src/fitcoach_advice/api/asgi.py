"""ASGI entrypoint for the advice API."""

from fitcoach_advice.api.app import create_app
from fitcoach_advice.containers import build_container

app = create_app(build_container())
