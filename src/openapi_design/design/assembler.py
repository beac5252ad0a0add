"""Resource and design assembly.

Enumerates every declared (path, verb) operation of a Document and fills
one Resource per operation from the flattening engine and the extractors.
"""

import logging

from openapi_design.design.examples import request_body_examples, response_body_examples
from openapi_design.design.flatten import flatten_media
from openapi_design.design.models import Design, Info, Resource, ResourceContent
from openapi_design.design.parameters import (
    HEADER,
    PATH,
    QUERY,
    extract_parameters,
    extract_response_headers,
    extract_security,
    merge_parameters,
)
from openapi_design.errors import UnsupportedOperation
from openapi_design.parser.document import Document, HttpMethod, Operation, PathItem

logger = logging.getLogger(__name__)


def transform(document: Document, strict: bool = False) -> Design:
    """Build the flat design of a whole document."""
    resources = build_resources(document, strict=strict)
    logger.info("Assembled %d resources from %r", len(resources), document.info.title)
    return Design(
        info=Info(
            title=document.info.title,
            version=document.info.version,
            description=document.info.description,
        ),
        resources=resources,
    )


def build_resources(document: Document, strict: bool = False) -> list[Resource]:
    """One Resource per declared operation: paths in document order, verbs in HttpMethod order."""
    resources = []
    for endpoint, path_item in document.paths.items():
        for method, _ in path_item.operations():
            resources.append(build_resource(document, endpoint, method.value, strict=strict))
    return resources


def resolve_operation(document: Document, endpoint: str, verb: str) -> tuple[HttpMethod, PathItem, Operation]:
    """Look up the parsed verb, path item and operation for an endpoint/verb pair."""
    method = HttpMethod.parse(verb)
    path_item = document.paths.get(endpoint)
    if path_item is None:
        raise UnsupportedOperation(f"unknown endpoint: {endpoint}")
    operation = path_item.operation(method)
    if operation is None:
        raise UnsupportedOperation(f"{method.value.upper()} is not declared for {endpoint}")
    return method, path_item, operation


def build_resource(document: Document, endpoint: str, verb: str, strict: bool = False) -> Resource:
    method, path_item, operation = resolve_operation(document, endpoint, verb)
    auth = extract_security(document.components.security_schemes)
    declared = merge_parameters(path_item, operation)
    success = operation.success_response()
    body = operation.request_body

    content = ResourceContent(
        request_header=[r for r in auth if r.location == HEADER] + extract_parameters(declared, HEADER),
        request_path=extract_parameters(declared, PATH),
        request_query=[r for r in auth if r.location == QUERY] + extract_parameters(declared, QUERY),
        request_body=flatten_media(body.content, strict) if body else {},
        request_body_example=request_body_examples(body),
        response_header=extract_response_headers(success),
        response_body=flatten_media(success.content, strict) if success else {},
        response_body_example=response_body_examples(operation.responses),
    )
    logger.debug(
        "%s %s: %d body media types, %d declared parameters",
        method.value.upper(), endpoint, len(content.request_body), len(declared),
    )
    return Resource(
        resource_definition=operation.summary,
        description=operation.description,
        endpoint=endpoint,
        request_verb=method.value,
        resource_content=content,
    )
