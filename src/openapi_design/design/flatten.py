"""Schema flattening engine.

Walks a nested schema depth-first and emits an ordered list of
parent-linked :class:`ParameterRecord` rows. At every nesting level the
scalar properties come before the object/array properties; within each
group the declaration order of the document is kept.

The walk first builds an explicit tree (an arena of nodes holding child
index lists) and then emits it in pre-order, so a node's own record always
precedes its descendants. Property names and required flags travel as
traversal arguments; the input schema is never written to.
"""

import logging

from pydantic import BaseModel

from openapi_design.design.models import ROOT_PARENT, ParameterRecord
from openapi_design.errors import MalformedSchemaNode
from openapi_design.parser.document import MediaType, Schema

logger = logging.getLogger(__name__)

BODY = "body"
SCALAR_TYPES = {"string", "number", "integer", "boolean"}
COMPOSITE_TYPES = {"object", "array"}


class FieldNode(BaseModel):
    """One node of the flattened tree before it is turned into a record."""

    name: str
    data_type: str
    required: bool
    description: str
    parent: int | None = None
    children: list[int] = []


class SchemaTree:
    """Arena of FieldNodes; indexes stand in for parent/child pointers."""

    def __init__(self):
        self.nodes: list[FieldNode] = []

    def add(self, parent: int | None, name: str, data_type: str, required: bool, description: str) -> int:
        index = len(self.nodes)
        self.nodes.append(
            FieldNode(
                name=name,
                data_type=data_type,
                required=required,
                description=description,
                parent=parent,
            )
        )
        if parent is not None:
            self.nodes[parent].children.append(index)
        return index

    def roots(self) -> list[int]:
        return [i for i, node in enumerate(self.nodes) if node.parent is None]

    def records(self, root_parent: str = ROOT_PARENT) -> list[ParameterRecord]:
        """Emit the tree in pre-order; parents are referenced by name."""
        records = []
        pending = list(reversed(self.roots()))
        while pending:
            index = pending.pop()
            node = self.nodes[index]
            parent = root_parent if node.parent is None else self.nodes[node.parent].name
            records.append(
                ParameterRecord(
                    parent=parent,
                    name=node.name,
                    location=BODY,
                    data_type=node.data_type,
                    required=node.required,
                    description=node.description,
                )
            )
            pending.extend(reversed(node.children))
        return records


def flatten(schema: Schema, parent: str = ROOT_PARENT, strict: bool = False) -> list[ParameterRecord]:
    """Flatten one schema node into body records.

    The node itself is named by its title and is required unless nullable.
    Unknown type tags are skipped, or raise MalformedSchemaNode when strict.
    """
    tree = SchemaTree()
    _visit(tree, schema, None, schema.title, not schema.nullable, strict)
    return tree.records(parent)


def flatten_media(content: dict[str, MediaType], strict: bool = False) -> dict[str, list[ParameterRecord]]:
    """Flatten the schema of every media type in a request or response body."""
    return {
        media_type: flatten(media.schema_, ROOT_PARENT, strict) if media.schema_ else []
        for media_type, media in content.items()
    }


def _visit(tree: SchemaTree, schema: Schema, parent: int | None, name: str, required: bool, strict: bool) -> None:
    tag = schema.type.lower()

    if tag == "object":
        index = tree.add(parent, name, "object", required, schema.description)
        _visit_properties(tree, schema, index, strict)
    elif tag == "array":
        items = schema.items
        item_tag = items.type.lower() if items else ""
        if strict and item_tag not in SCALAR_TYPES | COMPOSITE_TYPES:
            raise MalformedSchemaNode(f"{name}[]", items.type if items else "")
        index = tree.add(parent, name, f"array[{item_tag}]", required, schema.description)
        # The item schema gets no record of its own; its properties hang off the array.
        if item_tag == "object":
            _visit_properties(tree, items, index, strict)
    elif tag in SCALAR_TYPES:
        tree.add(parent, name, tag, required, schema.description)
    elif strict:
        raise MalformedSchemaNode(name, schema.type)
    else:
        logger.debug("Skipping schema node %r with type %r", name, schema.type)


def _visit_properties(tree: SchemaTree, schema: Schema, index: int, strict: bool) -> None:
    required = set(schema.required)
    for name, prop in _scalars_first(schema.properties):
        _visit(tree, prop, index, name, name in required, strict)


def _scalars_first(properties: dict[str, Schema]) -> list[tuple[str, Schema]]:
    # sorted() is stable, so declaration order survives within each group
    return sorted(properties.items(), key=lambda item: item[1].type.lower() in COMPOSITE_TYPES)
