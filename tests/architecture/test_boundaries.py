from pytest_archon import archrule

# Modules that translate criteria and map documents without touching the client.
TRANSLATION_CORE = (
    "orm_es_connector.coercion",
    "orm_es_connector.criteria",
    "orm_es_connector.model_mapper",
    "orm_es_connector.query_builder",
    "orm_es_connector.schema",
)


def test_translation_core_is_transport_free() -> None:
    """
    Criteria translation and document mapping are pure transforms.
    They must not import the Elasticsearch client or its transport.
    """
    for module in TRANSLATION_CORE:
        (
            archrule(f"{module}_transport_free")
            .match(module)
            .should_not_import("elasticsearch*")
            .should_not_import("elastic_transport*")
            .check("orm_es_connector")
        )


def test_translation_core_does_not_import_connector() -> None:
    """
    The core must not depend on the connector or connection layers.
    """
    for module in TRANSLATION_CORE:
        (
            archrule(f"{module}_layering")
            .match(module)
            .should_not_import("orm_es_connector.connector")
            .should_not_import("orm_es_connector.connection")
            .check("orm_es_connector")
        )


def test_settings_are_transport_free() -> None:
    """
    Settings and client configuration are plain data; the client is only
    constructed by the connection manager.
    """
    for module in ("orm_es_connector.settings", "orm_es_connector.config"):
        (
            archrule(f"{module}_independence")
            .match(module)
            .should_not_import("elasticsearch*")
            .check("orm_es_connector")
        )
