# Copyright 2025 Softwell S.r.l.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for document aggregation, validation and exposure."""

import json
import logging

import pytest
import yaml
from pydantic import BaseModel

from genro_swagger import (
    DocumentValidationError,
    DuplicateRoute,
    Operation,
    Parameter,
    Router,
)

HELLO_ONLY = (
    '{"components":{},"info":{"title":"test swagger title","version":"test swagger version"},'
    '"openapi":"3.0.0","paths":{"/hello":{"get":{"responses":{"default":{"description":""}}}}}}'
)


def ok_handler(*args, **kwargs):
    return "OK"


def test_minimal_document_is_byte_exact(router):
    router.add_raw_route("GET", "/hello", ok_handler, Operation())
    router.generate_and_expose_swagger()

    assert router.json_bytes().decode() == HELLO_ONLY
    assert router.generated is True


def test_sub_router_routes_are_documented_under_full_path(router):
    router.add_route("GET", "/hello", ok_handler)
    sub = router.sub_router("/prefix")
    sub.add_route("GET", "/foo", ok_handler)

    router.generate_and_expose_swagger()

    assert router.json_bytes().decode() == (
        '{"components":{},"info":{"title":"test swagger title","version":"test swagger version"},'
        '"openapi":"3.0.0","paths":{"/hello":{"get":{"responses":{"default":{"description":""}}}},'
        '"/prefix/foo":{"get":{"responses":{"default":{"description":""}}}}}}'
    )
    assert "/foo" not in router.document.paths


def test_documentation_route_is_served_and_not_documented(router, adapter):
    router.add_route("GET", "/hello", ok_handler)
    router.generate_and_expose_swagger()

    serve_json = adapter.handler_for("GET", "/documentation/json")
    serve_yaml = adapter.handler_for("GET", "/documentation/yaml")
    assert serve_json() == ("application/json", router.json_bytes())
    media_type, body = serve_yaml()
    assert yaml.safe_load(body) == json.loads(router.json_bytes())
    assert "/documentation/json" not in router.document.paths

    with pytest.raises(DuplicateRoute):
        router.add_route("GET", "/documentation/json", ok_handler)


def test_generation_is_idempotent_and_registers_docs_once(router, adapter):
    router.add_route("GET", "/hello", ok_handler)
    router.generate_and_expose_swagger()
    first = router.json_bytes()
    registered = len(adapter.registered)

    router.generate_and_expose_swagger()

    assert router.json_bytes() == first
    assert len(adapter.registered) == registered


def test_exposed_document_only_changes_on_regeneration(router, adapter):
    router.add_route("GET", "/hello", ok_handler)
    router.generate_and_expose_swagger()
    serve_json = adapter.handler_for("GET", "/documentation/json")

    route = router.add_route("GET", "/late", ok_handler)
    assert adapter.handler_for("GET", "/late") is ok_handler
    assert serve_json()[1] == HELLO_ONLY.encode()

    router.generate_and_expose_swagger()
    assert "/late" in json.loads(serve_json()[1])["paths"]

    # fragments mutated after generation only land with the next one
    route.operation.summary = "Late"
    assert "summary" not in json.loads(serve_json()[1])["paths"]["/late"]["get"]
    router.generate_and_expose_swagger()
    assert json.loads(serve_json()[1])["paths"]["/late"]["get"]["summary"] == "Late"


def test_validation_failure_exposes_nothing(router, adapter):
    router.add_route("GET", "/broken", ok_handler, {"responses": {999: {"description": "?"}}})

    with pytest.raises(DocumentValidationError):
        router.generate_and_expose_swagger()

    assert router.json_bytes() is None
    assert router.generated is False
    assert adapter.handler_for("GET", "/documentation/json") is None
    assert router.document.paths == {}
    # live routes keep serving
    assert adapter.handler_for("GET", "/broken") is ok_handler


def test_validation_failure_keeps_previous_exposure(router):
    router.add_route("GET", "/hello", ok_handler)
    router.generate_and_expose_swagger()
    router.add_route("GET", "/broken", ok_handler, {"responses": {"nope": {"description": ""}}})

    with pytest.raises(DocumentValidationError):
        router.generate_and_expose_swagger()

    assert router.json_bytes().decode() == HELLO_ONLY
    assert list(router.document.paths) == ["/hello"]


def test_taken_documentation_path_fails_before_exposing(router, adapter):
    router.add_route("GET", "/hello", ok_handler)
    router.add_route("GET", "/documentation/yaml", ok_handler)

    with pytest.raises(DuplicateRoute):
        router.generate_and_expose_swagger()

    assert router.json_bytes() is None
    assert router.generated is False
    assert router.document.paths == {}
    assert adapter.handler_for("GET", "/documentation/json") is None
    assert adapter.handler_for("GET", "/documentation/yaml") is ok_handler


def test_unresolvable_reference_is_a_validation_error(router):
    router.add_route(
        "GET",
        "/missing",
        ok_handler,
        {
            "responses": {
                200: {
                    "description": "ok",
                    "content": {
                        "application/json": {"schema": {"$ref": "#/components/schemas/Missing"}}
                    },
                }
            }
        },
    )

    with pytest.raises(DocumentValidationError):
        router.generate_and_expose_swagger()

    assert router.json_bytes() is None
    assert router.generated is False


def test_missing_path_parameters_are_generated(router):
    router.add_route("GET", "/users/{user_id}", ok_handler)
    orgs = router.sub_router("/orgs/{org}")
    orgs.add_route(
        "GET",
        "/members/{member}",
        ok_handler,
        {"parameters": [Parameter(name="member", in_="path", required=True, schema_={"type": "integer"})]},
    )

    document = router.generate_and_expose_swagger().to_dict()

    assert document["paths"]["/users/{user_id}"]["get"]["parameters"] == [
        {"name": "user_id", "in": "path", "required": True, "schema": {"type": "string"}}
    ]
    members = document["paths"]["/orgs/{org}/members/{member}"]["get"]["parameters"]
    assert {p["name"]: p["schema"]["type"] for p in members} == {
        "member": "integer",
        "org": "string",
    }


def test_pydantic_models_become_component_schemas(router):
    class Address(BaseModel):
        city: str

    class User(BaseModel):
        name: str
        address: Address

    router.add_route(
        "POST",
        "/users",
        ok_handler,
        {
            "requestBody": {"required": True, "content": {"application/json": {"schema": User}}},
            "responses": {201: {"description": "created", "content": {"application/json": {"schema": User}}}},
        },
        openapi_tags=["users"],
    )

    document = json.loads(router.generate_and_expose_swagger().to_json())

    operation = document["paths"]["/users"]["post"]
    body_schema = operation["requestBody"]["content"]["application/json"]["schema"]
    assert body_schema["properties"]["address"] == {"$ref": "#/components/schemas/Address"}
    assert document["components"]["schemas"]["Address"]["properties"]["city"]["type"] == "string"
    assert operation["responses"]["201"]["description"] == "created"
    assert operation["tags"] == ["users"]
    # registered fragments still hold the model class
    assert router.routes[0].operation.request_body.content["application/json"].schema_ is User


def test_base_components_are_kept(adapter):
    router = Router(
        adapter,
        {"title": "t", "version": "1"},
        components={"securitySchemes": {"apiKey": {"type": "apiKey", "name": "X-Key", "in": "header"}}},
        yaml_documentation_path=None,
    )
    router.add_route("GET", "/hello", ok_handler)
    router.generate_and_expose_swagger()

    assert json.loads(router.json_bytes())["components"]["securitySchemes"]["apiKey"]["in"] == "header"
    assert router.yaml_bytes() is None
    assert adapter.handler_for("GET", "/documentation/yaml") is None


def test_independent_routers_do_not_collide(adapter_class):
    first_adapter, second_adapter = adapter_class(), adapter_class()
    first = Router(first_adapter, {"title": "first", "version": "1"})
    second = Router(second_adapter, {"title": "second", "version": "1"})
    first.add_route("GET", "/a", ok_handler)
    second.add_route("GET", "/b", ok_handler)

    first.generate_and_expose_swagger()
    second.generate_and_expose_swagger()

    assert list(json.loads(first.json_bytes())["paths"]) == ["/a"]
    assert list(json.loads(second.json_bytes())["paths"]) == ["/b"]
    assert first_adapter.handler_for("GET", "/documentation/json") is not None
    assert second_adapter.handler_for("GET", "/documentation/json") is not None


def test_generation_logs_outcome(router, caplog):
    router.add_route("GET", "/hello", ok_handler)
    with caplog.at_level(logging.DEBUG, logger="genro_swagger"):
        router.generate_and_expose_swagger()
        router.add_route("GET", "/broken", ok_handler, {"responses": {999: {"description": "x"}}})
        with pytest.raises(DocumentValidationError):
            router.generate_and_expose_swagger()

    levels = [record.levelname for record in caplog.records if record.name == "genro_swagger"]
    assert "INFO" in levels
    assert "DEBUG" in levels
    assert levels[-1] == "WARNING"
