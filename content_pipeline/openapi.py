"""
OpenAPI document for the static JSON API
"""

from typing import Optional

from .config import CATEGORY_REGISTRY, SITE_DESCRIPTION, SITE_LICENSE, SITE_NAME, SITE_URL, SITE_VERSION

OPENAPI_VERSION = "3.1.0"


def _json_response(description: str, schema_ref: str) -> dict:
    return {
        "description": description,
        "content": {"application/json": {"schema": {"$ref": f"#/components/schemas/{schema_ref}"}}},
    }


def _component_schemas(categories: list) -> dict:
    return {
        "ContentItem": {
            "type": "object",
            "required": ["slug", "title", "description", "category", "type", "url"],
            "properties": {
                "slug": {"type": "string"},
                "title": {"type": "string"},
                "description": {"type": "string"},
                "author": {"type": "string"},
                "tags": {"type": "array", "items": {"type": "string"}},
                "category": {"type": "string", "enum": categories},
                "dateAdded": {"type": "string", "format": "date"},
                "type": {"type": "string"},
                "url": {"type": "string", "format": "uri"},
            },
            "additionalProperties": True,
        },
        "CategoryResponse": {
            "type": "object",
            "required": ["count", "lastUpdated", "generated"],
            "properties": {
                "count": {"type": "integer", "minimum": 0},
                "lastUpdated": {"type": "string", "format": "date-time"},
                "generated": {"type": "string", "const": "static"},
            },
            "additionalProperties": {
                "type": "array",
                "items": {"$ref": "#/components/schemas/ContentItem"},
            },
        },
        "AllConfigurationsResponse": {
            "type": "object",
            "required": ["@context", "@type", "name", "statistics", "data", "endpoints"],
            "properties": {
                "@context": {"type": "string"},
                "@type": {"type": "string", "const": "Dataset"},
                "name": {"type": "string"},
                "description": {"type": "string"},
                "license": {"type": "string"},
                "lastUpdated": {"type": "string", "format": "date-time"},
                "statistics": {"type": "object", "additionalProperties": {"type": "integer"}},
                "data": {
                    "type": "object",
                    "additionalProperties": {
                        "type": "array",
                        "items": {"$ref": "#/components/schemas/ContentItem"},
                    },
                },
                "endpoints": {"type": "object", "additionalProperties": {"type": "string", "format": "uri"}},
            },
        },
        "SearchableItem": {
            "type": "object",
            "required": ["title", "description", "tags", "category", "slug"],
            "properties": {
                "title": {"type": "string"},
                "name": {"type": "string"},
                "description": {"type": "string"},
                "tags": {"type": "array", "items": {"type": "string"}},
                "category": {"type": "string"},
                "slug": {"type": "string"},
                "popularity": {"type": "number"},
            },
        },
        "TagCount": {
            "type": "object",
            "required": ["tag", "count"],
            "properties": {"tag": {"type": "string"}, "count": {"type": "integer"}},
        },
        "SearchIndex": {
            "type": "object",
            "required": ["items", "count", "tags", "popularTags"],
            "properties": {
                "category": {"type": "string"},
                "items": {"type": "array", "items": {"$ref": "#/components/schemas/SearchableItem"}},
                "count": {"type": "integer"},
                "lastUpdated": {"type": "string", "format": "date-time"},
                "generated": {"type": "string", "const": "static"},
                "tags": {"type": "array", "items": {"type": "string"}},
                "popularTags": {"type": "array", "items": {"$ref": "#/components/schemas/TagCount"}},
            },
        },
        "HealthResponse": {
            "type": "object",
            "required": ["status", "version", "counts"],
            "properties": {
                "status": {"type": "string", "enum": ["healthy", "degraded"]},
                "timestamp": {"type": "string", "format": "date-time"},
                "version": {"type": "string"},
                "counts": {"type": "object", "additionalProperties": {"type": "integer"}},
            },
        },
    }


def build_openapi_document(
    categories: Optional[list] = None,
    base_url: str = SITE_URL,
    version: str = SITE_VERSION,
) -> dict:
    """
    OpenAPI 3.1 description of the static API endpoints.

    Args:
        categories: Categories exposed as ``/static-api/<category>.json``;
            defaults to every category with a static API
        base_url: Site origin used as the server URL
        version: API version string
    """
    if categories is None:
        categories = [c for c, config in CATEGORY_REGISTRY.items() if config["generate_static_api"]]
    base_url = base_url.rstrip("/")

    paths = {}
    for category in categories:
        config = CATEGORY_REGISTRY[category]
        paths[f"/static-api/{category}.json"] = {
            "get": {
                "operationId": f"list{config['type_name'].replace('Content', '')}Items",
                "summary": f"List all {config['plural_title']}",
                "tags": [config["plural_title"]],
                "responses": {"200": _json_response(f"All {config['plural_title']}", "CategoryResponse")},
            }
        }
        paths[f"/static-api/search-indexes/{category}.json"] = {
            "get": {
                "operationId": f"search{config['type_name'].replace('Content', '')}Index",
                "summary": f"Search index for {config['plural_title']}",
                "tags": ["Search"],
                "responses": {"200": _json_response("Category search index", "SearchIndex")},
            }
        }

    paths["/static-api/all-configurations.json"] = {
        "get": {
            "operationId": "listAllConfigurations",
            "summary": "All configurations as a schema.org Dataset",
            "tags": ["Configurations"],
            "responses": {"200": _json_response("Every configuration", "AllConfigurationsResponse")},
        }
    }
    paths["/static-api/search-indexes/combined.json"] = {
        "get": {
            "operationId": "getCombinedSearchIndex",
            "summary": "Combined search index across categories",
            "tags": ["Search"],
            "responses": {"200": _json_response("Combined search index", "SearchIndex")},
        }
    }
    paths["/static-api/health.json"] = {
        "get": {
            "operationId": "getHealth",
            "summary": "Build health and item counts",
            "tags": ["Health"],
            "responses": {"200": _json_response("Health status", "HealthResponse")},
        }
    }

    return {
        "openapi": OPENAPI_VERSION,
        "info": {
            "title": f"{SITE_NAME} API",
            "version": version,
            "description": SITE_DESCRIPTION,
            "license": {"name": SITE_LICENSE, "identifier": SITE_LICENSE},
        },
        "servers": [{"url": base_url}],
        "paths": paths,
        "components": {"schemas": _component_schemas(list(CATEGORY_REGISTRY.keys()))},
    }
