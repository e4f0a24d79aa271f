"""ASGI entrypoint for the HealMeal API."""

from healmeal.api.app import create_app
from healmeal.containers import build_container

app = create_app(build_container())
