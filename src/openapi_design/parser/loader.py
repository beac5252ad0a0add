"""OpenAPI 3.x document loader.

Reads a YAML or JSON file, inlines local ``$ref`` pointers and validates
the result into a read-only :class:`Document`.
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from openapi_design.errors import MalformedDocument
from openapi_design.parser.detect import decode_text, detect_version
from openapi_design.parser.document import Document

logger = logging.getLogger(__name__)


def load_document(file_path: Path) -> Document:
    """Load an OpenAPI 3.x file into a Document."""
    text = file_path.read_text(encoding="utf-8")
    try:
        data = decode_text(text, file_path.suffix)
    except yaml.YAMLError as e:
        raise MalformedDocument(f"{file_path}: cannot decode document: {e}") from e
    logger.debug("Decoded %s", file_path)
    return parse_document(data)


def parse_document(data: Any) -> Document:
    """Validate an already-decoded document mapping into a Document."""
    version = detect_version(data)
    if version == "swagger2":
        raise MalformedDocument("Swagger 2.0 documents are not supported; convert to OpenAPI 3.x")
    if version != "openapi3":
        raise MalformedDocument("not an OpenAPI 3.x document")

    # Only the parts the design reads are inlined; unused component schemas
    # may be recursive without affecting the transformation.
    components = data.get("components") or {}
    resolved = {
        "openapi": data.get("openapi"),
        "info": data.get("info"),
        "paths": _resolve_refs(data.get("paths"), data, ()),
        "components": {
            "securitySchemes": _resolve_refs(components.get("securitySchemes"), data, ()),
        },
    }
    try:
        return Document.model_validate(resolved)
    except ValidationError as e:
        raise MalformedDocument(f"invalid OpenAPI document: {e}") from e


def _resolve_refs(node: Any, root: dict, stack: tuple[str, ...]) -> Any:
    """Return a copy of ``node`` with every local $ref replaced by its target."""
    if isinstance(node, dict):
        ref = node.get("$ref")
        if isinstance(ref, str):
            if not ref.startswith("#/"):
                logger.warning("Leaving external $ref unresolved: %s", ref)
                return {}
            if ref in stack:
                logger.warning("Cutting cyclic $ref: %s", " -> ".join(stack + (ref,)))
                return {}
            return _resolve_refs(_lookup(root, ref), root, stack + (ref,))
        return {key: _resolve_refs(value, root, stack) for key, value in node.items()}
    if isinstance(node, list):
        return [_resolve_refs(item, root, stack) for item in node]
    return node


def _lookup(root: dict, ref: str) -> Any:
    node: Any = root
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            raise MalformedDocument(f"unresolvable $ref: {ref}")
        node = node[part]
    return node
