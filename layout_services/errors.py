from __future__ import annotations


class LayoutServiceError(Exception):
    """Base class for failures in the collaborators around the layout engine."""


class PersistenceFailure(LayoutServiceError):
    """Loading or saving the layout failed."""


class UnauthenticatedError(PersistenceFailure):
    """The layout endpoint rejected the request (HTTP 403)."""


class CatalogUnavailable(LayoutServiceError):
    """Plugin or widget catalog could not be listed."""
