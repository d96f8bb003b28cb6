"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Services hold business rules that span entities or need a repository.
    """

    pass
