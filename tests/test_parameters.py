from openapi_design.design.parameters import (
    extract_parameters,
    extract_response_headers,
    extract_security,
    merge_parameters,
)
from openapi_design.parser.document import Operation, PathItem, Response, SecurityScheme


def _param(name: str, location: str, **extra) -> dict:
    return {"name": name, "in": location, "schema": {"type": extra.pop("type", "string")}, **extra}


class TestMergeParameters:
    def test_path_level_applies_to_operation(self):
        item = PathItem.model_validate({"parameters": [_param("id", "path", required=True)]})
        op = Operation.model_validate({"parameters": [_param("q", "query")]})
        merged = merge_parameters(item, op)
        assert [p.name for p in merged] == ["id", "q"]

    def test_operation_level_overrides_in_place(self):
        item = PathItem.model_validate({
            "parameters": [_param("id", "path", description="old"), _param("trace", "header")],
        })
        op = Operation.model_validate({"parameters": [_param("id", "PATH", description="new")]})
        merged = merge_parameters(item, op)
        assert [(p.name, p.description) for p in merged] == [("id", "new"), ("trace", "")]


class TestExtractParameters:
    def test_filters_by_location_case_insensitive(self):
        op = Operation.model_validate({
            "parameters": [
                _param("X-Trace", "Header", type="String", required=True, description="trace id"),
                _param("limit", "query", type="integer"),
            ],
        })
        records = extract_parameters(op.parameters, "header")
        assert len(records) == 1
        r = records[0]
        assert (r.parent, r.name, r.location, r.data_type, r.required, r.description) == (
            "", "X-Trace", "header", "string", True, "trace id",
        )

    def test_no_match_is_empty(self):
        op = Operation.model_validate({"parameters": [_param("limit", "query")]})
        assert extract_parameters(op.parameters, "path") == []

    def test_parameter_without_schema(self):
        op = Operation.model_validate({"parameters": [{"name": "raw", "in": "query"}]})
        assert extract_parameters(op.parameters, "query")[0].data_type == ""


class TestExtractSecurity:
    def _schemes(self, data: dict) -> dict[str, SecurityScheme]:
        return {name: SecurityScheme.model_validate(value) for name, value in data.items()}

    def test_api_key_header_and_query(self):
        records = extract_security(self._schemes({
            "header_key": {"type": "apiKey", "in": "header", "name": "X-API-Key", "description": "key"},
            "query_key": {"type": "apiKey", "in": "query", "name": "api_key"},
        }))
        assert [(r.name, r.location, r.required, r.data_type) for r in records] == [
            ("X-API-Key", "header", True, "string"),
            ("api_key", "query", True, "string"),
        ]
        assert records[0].description == "key"

    def test_http_and_oauth_share_authorization_header(self):
        records = extract_security(self._schemes({
            "bearer": {"type": "http", "scheme": "bearer"},
            "oauth": {"type": "oauth2"},
        }))
        assert [(r.name, r.location) for r in records] == [("Authorization", "header")]

    def test_cookie_key_ignored(self):
        records = extract_security(self._schemes({
            "session": {"type": "apiKey", "in": "cookie", "name": "sid"},
        }))
        assert records == []

    def test_unknown_scheme_type_ignored(self):
        assert extract_security(self._schemes({"tls": {"type": "mutualTLS"}})) == []


class TestExtractResponseHeaders:
    def test_headers(self):
        response = Response.model_validate({
            "headers": {
                "X-Rate-Limit": {"description": "calls per hour", "required": True, "schema": {"type": "Integer"}},
                "X-Next": {},
            },
        })
        records = extract_response_headers(response)
        assert [(r.name, r.location, r.data_type, r.required) for r in records] == [
            ("X-Rate-Limit", "header", "integer", True),
            ("X-Next", "header", "", False),
        ]

    def test_no_response(self):
        assert extract_response_headers(None) == []
