"""ASGI entrypoint for the NutriTalk API."""

from nutritalk.api.app import create_app
from nutritalk.containers import build_container

app = create_app(build_container())
