"""Request and response example extraction."""

import json
import logging
from typing import Any

from openapi_design.parser.document import MediaType, RequestBody, Response

logger = logging.getLogger(__name__)


def serialize_example(value: Any) -> str:
    """Canonical text form of an example literal: compact JSON, sorted keys."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def request_body_examples(body: RequestBody | None) -> dict[str, dict[str, str]]:
    """Group request examples by media type, then by example name."""
    if body is None:
        return {}
    grouped = {}
    for media_type, media in body.content.items():
        examples = _serialize_all(media)
        if examples:
            grouped[media_type] = examples
    return grouped


def response_body_examples(responses: dict[str, Response]) -> dict[str, dict[str, str]]:
    """Group response examples by status code, then by example name.

    Examples of every media type under a status share one namespace; a
    later media type overwrites an earlier one on a name collision.
    """
    grouped = {}
    for status, response in responses.items():
        examples = {}
        for media in response.content.values():
            examples.update(_serialize_all(media))
        if examples:
            grouped[status] = examples
    return grouped


def _serialize_all(media: MediaType) -> dict[str, str]:
    serialized = {}
    for name, example in media.examples.items():
        try:
            serialized[name] = serialize_example(example.value)
        except (TypeError, ValueError) as e:
            logger.warning("Dropping example %r: %s", name, e)
    return serialized
