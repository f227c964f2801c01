"""Tests for openapi2http.parser.extractor."""

from __future__ import annotations

from typing import Any

import pytest

from openapi2http.models import ParsedDocument
from openapi2http.parser.extractor import (
    _extract_servers,
    _extract_swagger2_servers,
    _merge_parameters,
    extract_document,
)


def _spec(paths: dict[str, Any], **extra: Any) -> dict[str, Any]:
    spec: dict[str, Any] = {
        "openapi": "3.0.3",
        "info": {"title": "T", "version": "1"},
        "paths": paths,
    }
    spec.update(extra)
    return spec


# ---------------------------------------------------------------------------
# Full extraction from petstore
# ---------------------------------------------------------------------------


class TestExtractDocumentPetstore:
    """Test full extraction from the petstore fixture."""

    def test_spec_version(self, petstore_document: ParsedDocument) -> None:
        assert petstore_document.spec_version == "3.0.3"

    def test_info(self, petstore_document: ParsedDocument) -> None:
        info = petstore_document.info
        assert info.title == "Pet Store API"
        assert info.description == "A sample API for managing pets"
        assert info.version == "1.0.0"

    def test_servers(self, petstore_document: ParsedDocument) -> None:
        servers = petstore_document.servers
        assert [s.url for s in servers] == [
            "https://petstore.swagger.io/v2",
            "http://localhost:8080/v2",
        ]
        assert servers[0].description == "Production server"

    def test_paths_keep_declaration_order(self, petstore_document: ParsedDocument) -> None:
        assert list(petstore_document.paths) == ["/pets/{petId}", "/pets"]
        assert list(petstore_document.paths["/pets"]) == ["post", "get"]
        assert list(petstore_document.paths["/pets/{petId}"]) == ["delete", "put", "get"]

    def test_operation_fields(self, petstore_document: ParsedDocument) -> None:
        op = petstore_document.paths["/pets"]["post"]
        assert op.method == "post"
        assert op.summary == "Create a pet"
        assert op.operation_id == "createPet"
        assert op.security == [{"bearerAuth": []}]
        assert op.has_json_body is True
        assert op.request_body is not None
        assert op.request_body.required is True

    def test_operation_without_security_field(self, petstore_document: ParsedDocument) -> None:
        assert petstore_document.paths["/pets"]["get"].security is None
        assert petstore_document.security is None

    def test_request_body_ref_is_followed(self, petstore_document: ParsedDocument) -> None:
        assert petstore_document.paths["/pets/{petId}"]["put"].has_json_body is True

    def test_path_level_parameters_inherited(self, petstore_document: ParsedDocument) -> None:
        params = petstore_document.paths["/pets/{petId}"]["get"].parameters
        assert [p["name"] for p in params] == ["petId"]

    def test_get_has_no_body(self, petstore_document: ParsedDocument) -> None:
        op = petstore_document.paths["/pets"]["get"]
        assert op.request_body is None
        assert op.has_json_body is False


# ---------------------------------------------------------------------------
# Info and top-level fields
# ---------------------------------------------------------------------------


class TestExtractInfo:
    """Metadata defaults and coercion."""

    def test_missing_title_defaults(self) -> None:
        doc = extract_document({"openapi": "3.0.3", "paths": {}})
        assert doc.info.title == "Untitled API"
        assert doc.info.version is None

    def test_numeric_version_coerced_to_string(self) -> None:
        doc = extract_document({"openapi": "3.0.3", "info": {"title": "T", "version": 2.1}})
        assert doc.info.version == "2.1"

    def test_top_level_security(self) -> None:
        doc = extract_document(_spec({}, security=[{"apiKey": []}]))
        assert doc.security == [{"apiKey": []}]

    def test_malformed_security_ignored(self) -> None:
        doc = extract_document(_spec({}, security="yes"))
        assert doc.security is None


# ---------------------------------------------------------------------------
# Servers
# ---------------------------------------------------------------------------


class TestExtractServers:
    """OpenAPI 3.x servers array."""

    def test_variables_replaced_by_defaults(self) -> None:
        servers = _extract_servers(
            {
                "servers": [
                    {
                        "url": "https://{region}.api.example.com:{port}/v1",
                        "variables": {
                            "region": {"default": "eu"},
                            "port": {"default": "8443"},
                        },
                    }
                ]
            }
        )
        assert servers[0].url == "https://eu.api.example.com:8443/v1"

    def test_variable_without_default_kept(self) -> None:
        servers = _extract_servers({"servers": [{"url": "https://{tenant}.example.com"}]})
        assert servers[0].url == "https://{tenant}.example.com"

    def test_malformed_entries_skipped(self) -> None:
        servers = _extract_servers(
            {"servers": ["https://string.example.com", {"description": "no url"}, {"url": "/api"}]}
        )
        assert [s.url for s in servers] == ["/api"]

    def test_missing_servers(self) -> None:
        assert _extract_servers({}) == []
        assert _extract_servers({"servers": {}}) == []


class TestExtractSwagger2Servers:
    """Swagger 2.0 schemes/host/basePath."""

    def test_one_server_per_scheme(self, swagger2_raw: dict[str, Any]) -> None:
        servers = _extract_swagger2_servers(swagger2_raw)
        assert [s.url for s in servers] == [
            "https://api.example.com/v1",
            "http://api.example.com/v1",
        ]

    def test_default_scheme_is_https(self) -> None:
        servers = _extract_swagger2_servers({"host": "api.example.com"})
        assert [s.url for s in servers] == ["https://api.example.com"]

    def test_base_path_gets_leading_slash(self) -> None:
        servers = _extract_swagger2_servers({"host": "h", "basePath": "v2", "schemes": ["http"]})
        assert servers[0].url == "http://h/v2"

    def test_base_path_only_is_relative(self) -> None:
        assert [s.url for s in _extract_swagger2_servers({"basePath": "/api"})] == ["/api"]

    def test_neither_host_nor_base_path(self) -> None:
        assert _extract_swagger2_servers({}) == []


# ---------------------------------------------------------------------------
# Paths and operations
# ---------------------------------------------------------------------------


class TestExtractPaths:
    """Operations, request bodies and parameters."""

    def test_non_method_keys_ignored(self) -> None:
        doc = extract_document(
            _spec(
                {
                    "/items": {
                        "summary": "Items",
                        "description": "All items",
                        "parameters": [],
                        "servers": [],
                        "x-internal": True,
                        "get": {"responses": {}},
                    }
                }
            )
        )
        assert list(doc.paths["/items"]) == ["get"]

    def test_method_keys_lowercased(self) -> None:
        doc = extract_document(_spec({"/items": {"GET": {"responses": {}}}}))
        assert list(doc.paths["/items"]) == ["get"]

    def test_query_and_additional_operations(self) -> None:
        doc = extract_document(
            _spec(
                {
                    "/search": {
                        "query": {"summary": "Search"},
                        "additionalOperations": {
                            "COPY": {"summary": "Copy"},
                            "query": {"summary": "Duplicate"},
                        },
                    }
                },
                openapi="3.2.0",
            )
        )
        ops = doc.paths["/search"]
        assert list(ops) == ["query", "copy"]
        assert ops["query"].summary == "Search"
        assert ops["copy"].method == "copy"

    def test_malformed_operation_skipped(self) -> None:
        doc = extract_document(_spec({"/x": {"get": "nope", "post": {"responses": {}}}}))
        assert list(doc.paths["/x"]) == ["post"]

    def test_malformed_paths_object(self) -> None:
        assert extract_document(_spec([])).paths == {}  # type: ignore[arg-type]

    def test_path_item_ref_followed(self) -> None:
        spec = _spec(
            {"/pets": {"$ref": "#/components/pathItems/Pets"}},
            components={"pathItems": {"Pets": {"get": {"summary": "Shared"}}}},
        )
        doc = extract_document(spec)
        assert doc.paths["/pets"]["get"].summary == "Shared"

    def test_unresolved_path_item_ref_warns(self) -> None:
        warnings: list[str] = []
        doc = extract_document(_spec({"/gone": {"$ref": "#/nope"}}), warnings=warnings)
        assert doc.paths["/gone"] == {}
        assert warnings == ["Unresolved $ref '#/nope': key 'nope' not found"]

    def test_non_json_request_body(self) -> None:
        doc = extract_document(
            _spec(
                {
                    "/upload": {
                        "post": {
                            "requestBody": {"content": {"multipart/form-data": {}}},
                        }
                    }
                }
            )
        )
        op = doc.paths["/upload"]["post"]
        assert op.request_body is not None
        assert op.request_body.content_types == ["multipart/form-data"]
        assert op.has_json_body is False

    def test_empty_security_list_preserved(self) -> None:
        doc = extract_document(_spec({"/open": {"get": {"security": []}}}))
        assert doc.paths["/open"]["get"].security == []

    def test_parameter_refs_resolved(self) -> None:
        spec = _spec(
            {"/x": {"get": {"parameters": [{"$ref": "#/components/parameters/Limit"}]}}},
            components={"parameters": {"Limit": {"name": "limit", "in": "query"}}},
        )
        doc = extract_document(spec)
        assert doc.paths["/x"]["get"].parameters == [{"name": "limit", "in": "query"}]


class TestMergeParameters:
    """Operation-level parameters override path-level ones."""

    def test_override_by_name_and_location(self) -> None:
        path_params = [
            {"name": "id", "in": "path", "description": "path-level"},
            {"name": "q", "in": "query"},
        ]
        op_params = [{"name": "id", "in": "path", "description": "op-level"}]
        merged = _merge_parameters(path_params, op_params)
        assert merged == [
            {"name": "q", "in": "query"},
            {"name": "id", "in": "path", "description": "op-level"},
        ]

    def test_same_name_different_location_kept(self) -> None:
        merged = _merge_parameters([{"name": "id", "in": "query"}], [{"name": "id", "in": "header"}])
        assert len(merged) == 2


# ---------------------------------------------------------------------------
# Swagger 2.0
# ---------------------------------------------------------------------------


class TestExtractSwagger2:
    """Body and form parameters become request bodies."""

    @pytest.fixture()
    def parsed(self, swagger2_raw: dict[str, Any]) -> ParsedDocument:
        return extract_document(swagger2_raw, "2.0")

    def test_body_parameter_defaults_to_json(self, parsed: ParsedDocument) -> None:
        op = parsed.paths["/users"]["post"]
        assert op.has_json_body is True
        assert op.request_body is not None
        assert op.request_body.required is True

    def test_form_data_uses_consumes(self, parsed: ParsedDocument) -> None:
        op = parsed.paths["/avatars"]["post"]
        assert op.request_body is not None
        assert op.request_body.content_types == ["application/x-www-form-urlencoded"]
        assert op.has_json_body is False

    def test_get_has_no_body(self, parsed: ParsedDocument) -> None:
        assert parsed.paths["/users"]["get"].request_body is None

    def test_document_consumes_applies(self) -> None:
        spec = {
            "swagger": "2.0",
            "consumes": ["application/xml"],
            "paths": {"/x": {"put": {"parameters": [{"name": "b", "in": "body"}]}}},
        }
        op = extract_document(spec).paths["/x"]["put"]
        assert op.request_body is not None
        assert op.request_body.content_types == ["application/xml"]

    def test_top_level_security(self, parsed: ParsedDocument) -> None:
        assert parsed.security == [{"apiKey": []}]
