from __future__ import annotations


class InvalidMoodError(ValueError):
    """Raised when the inbound mood is missing, blank, or not a string."""


class ClassifierUnavailableError(RuntimeError):
    pass


class CatalogUnavailableError(RuntimeError):
    pass


class TotalFailureError(RuntimeError):
    """Both the classifier and the catalog fell back; nothing useful is left."""
