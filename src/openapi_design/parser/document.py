"""Typed object graph of a decoded OpenAPI 3.x document.

The loader validates the raw mapping into these models once; everything
downstream navigates named fields instead of dictionary keys. Models are
frozen, so the transformation treats the document as read-only.
"""

from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from openapi_design.errors import UnsupportedOperation


class HttpMethod(str, Enum):
    """HTTP verbs that carry a resource in the design."""

    GET = "get"
    PUT = "put"
    POST = "post"
    DELETE = "delete"
    PATCH = "patch"

    @classmethod
    def parse(cls, value: str) -> "HttpMethod":
        try:
            return cls(value.lower())
        except ValueError:
            raise UnsupportedOperation(f"unsupported HTTP method: {value!r}") from None


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # An explicit null (description: ~, parameters:) falls back to the default
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Schema(_Node):
    """A data shape: object, array or scalar."""

    type: str = ""
    title: str = ""
    description: str = ""
    nullable: bool = False
    properties: dict[str, "Schema"] = {}
    required: list[str] = []
    items: "Schema | None" = None

    @model_validator(mode="before")
    @classmethod
    def _normalize_type_list(cls, data: Any) -> Any:
        # OpenAPI 3.1 spells nullability as a type list: ["string", "null"]
        if isinstance(data, dict) and isinstance(data.get("type"), list):
            tags = [t for t in data["type"] if t != "null"]
            data = dict(data)
            data["nullable"] = data.get("nullable", False) or len(tags) < len(data["type"])
            data["type"] = tags[0] if tags else ""
        return data


class Parameter(_Node):
    """A declared header, query, path or cookie parameter."""

    name: str
    location: str = Field("", alias="in")
    required: bool = False
    description: str = ""
    schema_: Schema | None = Field(None, alias="schema")

    @property
    def data_type(self) -> str:
        return self.schema_.type.lower() if self.schema_ else ""


class Header(_Node):
    description: str = ""
    required: bool = False
    schema_: Schema | None = Field(None, alias="schema")


class Example(_Node):
    summary: str = ""
    description: str = ""
    value: Any = None


class MediaType(_Node):
    schema_: Schema | None = Field(None, alias="schema")
    examples: dict[str, Example] = {}


class RequestBody(_Node):
    description: str = ""
    required: bool = False
    content: dict[str, MediaType] = {}


class Response(_Node):
    description: str = ""
    headers: dict[str, Header] = {}
    content: dict[str, MediaType] = {}


class Operation(_Node):
    summary: str = ""
    description: str = ""
    parameters: list[Parameter] = []
    request_body: RequestBody | None = Field(None, alias="requestBody")
    responses: dict[str, Response] = {}

    @field_validator("responses", mode="before")
    @classmethod
    def _status_keys_as_text(cls, value: Any) -> Any:
        # YAML decodes unquoted status codes (200:) as integers
        if isinstance(value, dict):
            return {str(code): response for code, response in value.items()}
        return value

    def success_response(self) -> Response | None:
        """Return the "200" response, else the first declared 2XX response."""
        if "200" in self.responses:
            return self.responses["200"]
        for code, response in self.responses.items():
            if code.startswith("2"):
                return response
        return None


class PathItem(_Node):
    """All operations declared under one path template."""

    parameters: list[Parameter] = []
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    patch: Operation | None = None

    def operation(self, method: HttpMethod) -> Operation | None:
        return getattr(self, method.value)

    def operations(self) -> Iterator[tuple[HttpMethod, Operation]]:
        for method in HttpMethod:
            operation = self.operation(method)
            if operation is not None:
                yield method, operation


class SecurityScheme(_Node):
    type: str = ""
    name: str = ""
    location: str = Field("", alias="in")
    scheme: str = ""
    description: str = ""


class Components(_Node):
    security_schemes: dict[str, SecurityScheme] = Field({}, alias="securitySchemes")


class Info(_Node):
    title: str = ""
    version: str = ""
    description: str = ""

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        # version: 1.0 decodes as a float, version: 2024-01-01 as a date
        if value is not None and not isinstance(value, str):
            return str(value)
        return value


class Document(_Node):
    """Root of a decoded OpenAPI 3.x document."""

    openapi: str = ""
    info: Info = Info()
    paths: dict[str, PathItem] = {}
    components: Components = Components()

    @field_validator("openapi", mode="before")
    @classmethod
    def _openapi_as_text(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, str):
            return str(value)
        return value
