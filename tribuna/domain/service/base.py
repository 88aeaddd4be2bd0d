"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Services wrap repositories with the rules that span a single call
    (validation, existence checks) and emit the logfire spans for it.
    """
