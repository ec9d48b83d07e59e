"""ASGI entrypoint for the gesture drawing API."""

from gesture_drawing.api.app import create_app
from gesture_drawing.containers import build_container

app = create_app(build_container())
