"""Elasticsearch datasource connector.

Maps a generic CRUD/query interface onto Elasticsearch: criteria become
search requests and stored documents become typed model records.
"""

from __future__ import annotations

from .coercion import coerce_field, coerce_id
from .config import ClientConfig, build_client_config
from .connection import ElasticsearchConnectionManager
from .connector import ElasticsearchConnector
from .criteria import Criteria
from .exceptions import (
    ConfigurationError,
    ElasticsearchConnectionError,
    ElasticsearchPersistenceError,
    ElasticsearchQueryError,
    MissingIdentifierError,
    UnknownModelError,
    UnsupportedOperationError,
)
from .model_mapper import ModelMapper, to_record
from .ports import IConnector
from .query_builder import FilterTranslator, QueryRequest
from .schema import FieldType, ModelRegistry, build_schema
from .settings import ElasticsearchSettings, MappingSettings, SslSettings

__all__ = [
    # Connector
    "ElasticsearchConnector",
    "ElasticsearchConnectionManager",
    "IConnector",
    # Settings
    "ElasticsearchSettings",
    "MappingSettings",
    "SslSettings",
    "ClientConfig",
    "build_client_config",
    # Translation and mapping
    "Criteria",
    "FilterTranslator",
    "QueryRequest",
    "FieldType",
    "ModelRegistry",
    "ModelMapper",
    "build_schema",
    "to_record",
    "coerce_id",
    "coerce_field",
    # Exceptions
    "ElasticsearchPersistenceError",
    "ConfigurationError",
    "ElasticsearchConnectionError",
    "ElasticsearchQueryError",
    "MissingIdentifierError",
    "UnknownModelError",
    "UnsupportedOperationError",
]
