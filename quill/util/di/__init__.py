"""Dependency injection: provider registry shared by the app and the tests."""

from typing import Type

from quill.util.di.application import ProdApplicationProvider
from quill.util.di.base import Component, ProviderBase
from quill.util.di.core import ProdConfigProvider
from quill.util.di.domain import ProdDomainProvider
from quill.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
)
from quill.util.error import DependencyInjectionError

# Order matters only for readability; dishka resolves the graph itself
PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable for in-memory repositories in tests
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for ``base``.

    A base without subclasses is a concrete provider and is returned as is.
    A base with subclasses is a swappable component; the subclass whose
    ``__is_mock__`` matches ``use_mock`` wins.

    Raises:
        DependencyInjectionError: If no subclass matches
    """
    candidates = base.__subclasses__()
    if not candidates:
        return base

    for candidate in candidates:
        if getattr(candidate, "__is_mock__", False) == use_mock:
            return candidate

    kind = "mock" if use_mock else "production"
    component = getattr(base, "__mock_component__", None) or base.__name__
    raise DependencyInjectionError(f"No {kind} implementation for {component}")


__all__ = [
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProviderBase",
    "get_provider",
]
