"""
backend/odds_assistant/services/manifest_service.py

Purpose:
    Build the assistant plugin manifest (OpenAPI 3 + ``x-mb`` extension) from
    the application's own OpenAPI document, so each tool's parameters and
    response schemas have exactly one definition.

Dependencies:
    - fastapi (``FastAPI.openapi``)
    - odds_assistant.config
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Optional

from fastapi import FastAPI

from odds_assistant.config import Settings

logger = logging.getLogger("odds_assistant.manifest")

TOOLS_TAG = "tools"
_REF_PREFIX = "#/components/schemas/"


def tool_paths(openapi_schema: dict[str, Any]) -> dict[str, Any]:
    """Keep only operations tagged ``tools``; paths left empty are dropped."""
    paths: dict[str, Any] = {}
    for path, path_item in openapi_schema.get("paths", {}).items():
        operations = {
            method: copy.deepcopy(operation)
            for method, operation in path_item.items()
            if isinstance(operation, dict) and TOOLS_TAG in operation.get("tags", ())
        }
        if operations:
            paths[path] = operations
    return paths


def _collect_refs(node: Any, found: set[str]) -> None:
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str) and ref.startswith(_REF_PREFIX):
            found.add(ref[len(_REF_PREFIX):])
        for value in node.values():
            _collect_refs(value, found)
    elif isinstance(node, list):
        for value in node:
            _collect_refs(value, found)


def referenced_schemas(paths: dict[str, Any], schemas: dict[str, Any]) -> dict[str, Any]:
    """Component schemas reachable from ``paths``, in their original order."""
    wanted: set[str] = set()
    _collect_refs(paths, wanted)
    pending = list(wanted)
    while pending:
        name = pending.pop()
        nested: set[str] = set()
        _collect_refs(schemas.get(name, {}), nested)
        for child in nested - wanted:
            wanted.add(child)
            pending.append(child)
    return {name: copy.deepcopy(schema) for name, schema in schemas.items() if name in wanted}


def _strip_validation_responses(paths: dict[str, Any]) -> None:
    """Validation failures surface as 400 ``{error}``; drop FastAPI's 422 entries."""
    for path_item in paths.values():
        for operation in path_item.values():
            operation.get("responses", {}).pop("422", None)
            operation.pop("tags", None)


def tool_ids(paths: dict[str, Any]) -> list[str]:
    ids = []
    for path_item in paths.values():
        for operation in path_item.values():
            op_id = operation.get("operationId")
            if op_id and op_id not in ids:
                ids.append(op_id)
    return ids


def build_manifest(openapi_schema: dict[str, Any], config: Settings) -> dict[str, Any]:
    """Render the manifest for every operation tagged ``tools``.

    ``openapi_schema`` is the application's full OpenAPI document; it is not
    modified. The assistant's tool list is taken from the rendered operation
    ids, so it can never reference an undeclared route.
    """
    paths = tool_paths(openapi_schema)
    _strip_validation_responses(paths)
    schemas = referenced_schemas(paths, openapi_schema.get("components", {}).get("schemas", {}))

    manifest: dict[str, Any] = {
        "openapi": openapi_schema.get("openapi"),
        "info": {
            "title": config.PLUGIN_TITLE,
            "description": config.PLUGIN_DESCRIPTION,
            "version": config.PLUGIN_VERSION,
        },
        "servers": [{"url": config.public_url}],
        "x-mb": {
            "account-id": config.account_id,
            "assistant": {
                "name": config.ASSISTANT_NAME,
                "description": config.ASSISTANT_DESCRIPTION,
                "instructions": config.ASSISTANT_INSTRUCTIONS,
                "tools": [{"type": op_id} for op_id in tool_ids(paths)],
            },
        },
        "paths": paths,
    }
    if schemas:
        manifest["components"] = {"schemas": schemas}
    return manifest


class ManifestCache:
    """Memoises the manifest per application; routes and settings never change at runtime."""

    def __init__(self) -> None:
        self._manifest: Optional[dict[str, Any]] = None

    def get(self, app: FastAPI, config: Settings) -> dict[str, Any]:
        if self._manifest is None:
            self._manifest = build_manifest(app.openapi(), config)
            logger.info(
                "Plugin manifest built with %d tools",
                len(self._manifest["x-mb"]["assistant"]["tools"]),
            )
        return self._manifest

    def clear(self) -> None:
        self._manifest = None
