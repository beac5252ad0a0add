"""Exceptions raised while loading a document or building a design."""


class DesignError(Exception):
    """Base class for all openapi-design errors."""


class MalformedDocument(DesignError):
    """The source document cannot be decoded or is not an OpenAPI 3.x document."""


class MalformedSchemaNode(DesignError):
    """A schema node has a missing or unrecognized type (strict mode only)."""

    def __init__(self, name: str, node_type: str):
        self.name = name
        self.node_type = node_type
        super().__init__(f"schema node {name!r} has unsupported type {node_type!r}")


class UnsupportedOperation(DesignError):
    """A path/verb pair does not resolve to a supported, declared operation."""
