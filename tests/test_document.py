import pytest
from pydantic import ValidationError

from openapi_design.errors import UnsupportedOperation
from openapi_design.parser.document import Document, HttpMethod, Operation, PathItem, Schema


class TestHttpMethod:
    def test_parse_is_case_insensitive(self):
        assert HttpMethod.parse("GET") is HttpMethod.GET
        assert HttpMethod.parse("Patch") is HttpMethod.PATCH

    def test_parse_unsupported(self):
        with pytest.raises(UnsupportedOperation):
            HttpMethod.parse("options")


class TestSchema:
    def test_type_list_with_null(self):
        schema = Schema.model_validate({"type": ["string", "null"]})
        assert schema.type == "string"
        assert schema.nullable is True

    def test_type_list_without_null(self):
        schema = Schema.model_validate({"type": ["integer"]})
        assert schema.type == "integer"
        assert schema.nullable is False

    def test_nested_properties_keep_order(self):
        schema = Schema.model_validate({
            "type": "object",
            "properties": {"b": {"type": "string"}, "a": {"type": "string"}},
        })
        assert list(schema.properties) == ["b", "a"]

    def test_unknown_keys_ignored(self):
        schema = Schema.model_validate({"type": "string", "format": "date-time", "maxLength": 10})
        assert schema.type == "string"


class TestOperation:
    def test_status_codes_become_text(self):
        op = Operation.model_validate({"responses": {200: {"description": "ok"}, "default": {}}})
        assert list(op.responses) == ["200", "default"]

    def test_success_response_prefers_200(self):
        op = Operation.model_validate({
            "responses": {"201": {"description": "created"}, "200": {"description": "ok"}},
        })
        assert op.success_response().description == "ok"

    def test_success_response_falls_back_to_2xx(self):
        op = Operation.model_validate({
            "responses": {"400": {"description": "bad"}, "201": {"description": "created"}},
        })
        assert op.success_response().description == "created"

    def test_no_success_response(self):
        op = Operation.model_validate({"responses": {"404": {}}})
        assert op.success_response() is None

    def test_aliases(self):
        op = Operation.model_validate({
            "parameters": [{"name": "id", "in": "path", "schema": {"type": "Integer"}}],
            "requestBody": {"content": {"application/json": {"schema": {"type": "object"}}}},
        })
        assert op.parameters[0].location == "path"
        assert op.parameters[0].data_type == "integer"
        assert op.request_body.content["application/json"].schema_.type == "object"


class TestPathItem:
    def test_operations_in_fixed_verb_order(self):
        item = PathItem.model_validate({
            "delete": {"summary": "d"},
            "get": {"summary": "g"},
            "options": {"summary": "o"},
        })
        assert [m for m, _ in item.operations()] == [HttpMethod.GET, HttpMethod.DELETE]

    def test_operation_lookup(self):
        item = PathItem.model_validate({"post": {"summary": "create"}})
        assert item.operation(HttpMethod.POST).summary == "create"
        assert item.operation(HttpMethod.GET) is None


class TestDocument:
    def test_numeric_versions_become_text(self):
        doc = Document.model_validate({"openapi": 3.1, "info": {"title": "t", "version": 1.0}})
        assert doc.openapi == "3.1"
        assert doc.info.version == "1.0"

    def test_document_is_read_only(self):
        doc = Document.model_validate({"openapi": "3.0.0"})
        with pytest.raises(ValidationError):
            doc.openapi = "3.1.0"


class TestExplicitNulls:
    def test_nulls_fall_back_to_defaults(self):
        doc = Document.model_validate({
            "openapi": "3.0.0",
            "info": {"title": "t", "version": "1", "description": None},
            "paths": {
                "/a": {
                    "parameters": None,
                    "get": {"description": None, "parameters": None, "responses": None, "requestBody": None},
                },
            },
            "components": None,
        })
        assert doc.info.description == ""
        op = doc.paths["/a"].get
        assert op.description == ""
        assert op.parameters == []
        assert op.responses == {}
        assert op.request_body is None
        assert doc.paths["/a"].parameters == []
        assert doc.components.security_schemes == {}

    def test_bare_paths_key(self):
        doc = Document.model_validate({"openapi": "3.0.0", "paths": None})
        assert doc.paths == {}

    def test_null_example_value_kept_as_none(self):
        op = Operation.model_validate({
            "responses": {"200": {"content": {"application/json": {"examples": {"nothing": {"value": None}}}}}},
        })
        assert op.responses["200"].content["application/json"].examples["nothing"].value is None
