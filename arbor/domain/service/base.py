"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business rules that span more than one entity.
    They keep no per-request state, so one instance can serve concurrent
    callers.
    """

    pass
