"""Projections of declared parameters, security schemes and response headers."""

import logging

from openapi_design.design.models import ParameterRecord
from openapi_design.parser.document import Operation, Parameter, PathItem, Response, SecurityScheme

logger = logging.getLogger(__name__)

HEADER = "header"
PATH = "path"
QUERY = "query"

AUTHORIZATION_HEADER = "Authorization"
# Schemes whose credential travels in the Authorization header
_AUTHORIZATION_SCHEMES = {"http", "oauth2", "openidconnect"}


def merge_parameters(path_item: PathItem, operation: Operation) -> list[Parameter]:
    """Combine path-level and operation-level declarations.

    An operation-level parameter with the same name and location replaces
    the path-level one in place; new ones are appended.
    """
    merged = list(path_item.parameters)
    positions = {(p.name, p.location.lower()): i for i, p in enumerate(merged)}
    for param in operation.parameters:
        key = (param.name, param.location.lower())
        if key in positions:
            merged[positions[key]] = param
        else:
            positions[key] = len(merged)
            merged.append(param)
    return merged


def extract_parameters(parameters: list[Parameter], location: str) -> list[ParameterRecord]:
    """Project every parameter declared in ``location`` (case-insensitive)."""
    return [
        ParameterRecord(
            parent="",
            name=p.name,
            location=p.location.lower(),
            data_type=p.data_type,
            required=p.required,
            description=p.description,
        )
        for p in parameters
        if p.location.lower() == location.lower()
    ]


def extract_security(schemes: dict[str, SecurityScheme]) -> list[ParameterRecord]:
    """Turn security scheme declarations into required header/query records."""
    records = []
    seen = set()
    for scheme_name, scheme in schemes.items():
        kind = scheme.type.lower()
        if kind == "apikey":
            location, name = scheme.location.lower(), scheme.name
        elif kind in _AUTHORIZATION_SCHEMES:
            location, name = HEADER, AUTHORIZATION_HEADER
        else:
            logger.debug("Skipping security scheme %r of type %r", scheme_name, scheme.type)
            continue

        if location not in (HEADER, QUERY) or (location, name) in seen:
            continue
        seen.add((location, name))
        records.append(
            ParameterRecord(
                parent="",
                name=name,
                location=location,
                data_type="string",
                required=True,
                description=scheme.description,
            )
        )
    return records


def extract_response_headers(response: Response | None) -> list[ParameterRecord]:
    if response is None:
        return []
    return [
        ParameterRecord(
            parent="",
            name=name,
            location=HEADER,
            data_type=header.schema_.type.lower() if header.schema_ else "",
            required=header.required,
            description=header.description,
        )
        for name, header in response.headers.items()
    ]
