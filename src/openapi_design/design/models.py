"""Flat, documentation-oriented output models.

Field names are the JSON wire names of the design document.
"""

from pydantic import BaseModel, ConfigDict

ROOT_PARENT = "root"
TRANSPORT_PROTOCOL = "HTTPS"


class ParameterRecord(BaseModel):
    """One flattened field: a name/type/location row with a parent link."""

    model_config = ConfigDict(frozen=True)

    parent: str
    name: str
    location: str  # header / path / query / body
    data_type: str  # string / number / integer / boolean / object / array[<item>]
    required: bool
    description: str


class ResourceContent(BaseModel):
    """Parameters and examples of one operation, partitioned by message part."""

    model_config = ConfigDict(frozen=True)

    request_header: list[ParameterRecord] = []
    request_path: list[ParameterRecord] = []
    request_query: list[ParameterRecord] = []
    request_body: dict[str, list[ParameterRecord]] = {}  # media type -> records
    request_body_example: dict[str, dict[str, str]] = {}  # media type -> name -> literal
    response_header: list[ParameterRecord] = []
    response_body: dict[str, list[ParameterRecord]] = {}  # media type -> records
    response_body_example: dict[str, dict[str, str]] = {}  # status -> name -> literal


class Resource(BaseModel):
    """One (endpoint, verb) operation."""

    model_config = ConfigDict(frozen=True)

    resource_definition: str
    description: str
    endpoint: str
    transport_protocol: str = TRANSPORT_PROTOCOL
    request_verb: str
    resource_content: ResourceContent = ResourceContent()


class Info(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    version: str
    description: str


class Design(BaseModel):
    """Root of the output: document metadata plus every resource."""

    model_config = ConfigDict(frozen=True)

    info: Info
    resources: list[Resource] = []

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)
