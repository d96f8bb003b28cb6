"""Test container builder with selective unmocking."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from quill.util.di import PROVIDERS, Component, get_provider
from quill.util.error import DependencyInjectionError


def build_test_container(unmock: set[Component] | None = None) -> AsyncContainer:
    """Build a container where swappable components default to mocks.

    Settings still come from the environment (tests/conftest.py sets test
    defaults).

    Args:
        unmock: Components to use production implementations for

    Raises:
        DependencyInjectionError: If ``unmock`` names an unknown component

    Examples:
        # Unit and e2e tests - in-memory repositories
        container = build_test_container()

        # Integration tests - real PostgreSQL
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    swappable = {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ and base.__subclasses__()
    }
    unknown = unmock - swappable
    if unknown:
        raise DependencyInjectionError(f"Unknown components: {unknown}")

    providers = []
    for base in PROVIDERS:
        component = base.__mock_component__
        use_mock = component is not None and component not in unmock
        providers.append(get_provider(base, use_mock=use_mock)())

    # FastapiProvider lets the same container serve a test app
    return make_async_container(*providers, FastapiProvider())
