"""Production container and its FastAPI wiring."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from quill.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build a container with every component's production provider.

    Settings come from the environment when the container first needs them.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container so routes can resolve ``FromDishka`` arguments."""
    setup_dishka(container, app)
