"""Elasticsearch persistence exceptions."""

from __future__ import annotations


class ElasticsearchPersistenceError(Exception):
    """Base for Elasticsearch persistence errors."""


class ConfigurationError(ElasticsearchPersistenceError):
    """Raised when datasource settings cannot be turned into a client config."""


class ElasticsearchConnectionError(ElasticsearchPersistenceError):
    """Raised when connecting or installing mappings fails."""


class ElasticsearchQueryError(ElasticsearchPersistenceError):
    """Raised when a request against the backend fails."""


class MissingIdentifierError(ElasticsearchPersistenceError):
    """Raised when an operation that needs a document id received none."""

    def __init__(self, operation: str, model: str) -> None:
        self.operation = operation
        self.model = model
        super().__init__(f"{operation}: document id not set for model {model!r}")


class UnknownModelError(ElasticsearchPersistenceError):
    """Raised when a model name has no registered property schema."""

    def __init__(self, model: str) -> None:
        self.model = model
        super().__init__(f"Model {model!r} is not defined")


class UnsupportedOperationError(ElasticsearchPersistenceError):
    """Raised for data-access operations this connector does not implement."""
