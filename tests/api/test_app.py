"""
Tests for the HTTP gateway
"""

import os
from unittest.mock import patch

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import OperationFailure

from conftest import CountingConnector, make_config
from courses.api.app import create_app
from courses.config import Settings
from courses.database.connection import reset_connection


def build_client(**overrides) -> TestClient:
    with patch.dict(os.environ, {}, clear=True):
        app_settings = Settings(_env_file=None, **overrides)
    return TestClient(create_app(app_settings))


HTML_HEADERS = {"Accept": "text/html"}


class TestHealth:
    def test_health_reports_connection_state(self):
        client = build_client()

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "version": "0.1.0",
            "database": "uninitialized",
        }

    def test_health_after_connecting(self, connector):
        client = build_client()
        client.post("/api", json={"query": "{ getCourses { id } }"})

        assert client.get("/health").json()["database"] == "connected"


class TestGraphQLEndpoint:
    def test_query(self, connector, collections):
        document = {"_id": ObjectId(), "title": "GraphQL Fundamentals", "teacher": "Ruth"}
        collections["courses"].find.return_value.to_list.return_value = [document]
        client = build_client()

        response = client.post("/api", json={"query": "{ getCourses { id title } }"})

        assert response.status_code == 200
        assert response.json() == {
            "data": {"getCourses": [{"id": str(document["_id"]), "title": "GraphQL Fundamentals"}]}
        }

    def test_query_error_shape(self, connector):
        client = build_client()

        response = client.post("/api", json={"query": '{ getCourse(id: "nope") { id } }'})

        body = response.json()
        assert body["data"] == {"getCourse": None}
        assert "Invalid id" in body["errors"][0]["message"]

    def test_connection_failure_requests_exit(self, terminate):
        reset_connection(
            connector=CountingConnector(error=OperationFailure("bad auth")),
            config_factory=make_config,
        )
        client = build_client()

        response = client.post("/api", json={"query": "{ getCourses { id } }"})

        assert "errors" in response.json()
        terminate.assert_called_once_with(1)

    def test_request_id_header(self, connector):
        client = build_client()

        response = client.post(
            "/api", json={"query": "{ getPeople { id } }"}, headers={"X-Request-ID": "req-123"}
        )

        assert response.headers["X-Request-ID"] == "req-123"

    def test_custom_graphql_path(self, connector):
        client = build_client(graphql_path="/graphql")

        assert client.post("/graphql", json={"query": "{ getPeople { id } }"}).status_code == 200
        assert client.post("/api", json={"query": "{ getPeople { id } }"}).status_code == 404


class TestGraphiQL:
    def test_served_in_development(self):
        client = build_client(environment="development")

        response = client.get("/api", headers=HTML_HEADERS)

        assert response.status_code == 200
        assert "graphiql" in response.text.lower()

    @pytest.mark.parametrize("environment", ["production", "production ", "prod"])
    def test_hidden_in_production(self, environment):
        client = build_client(environment=environment)

        response = client.get("/api", headers=HTML_HEADERS)

        assert response.status_code == 404


class TestCors:
    PREFLIGHT_HEADERS = {
        "Origin": "https://frontend.example.com",
        "Access-Control-Request-Method": "POST",
    }

    def test_enabled_by_default(self):
        client = build_client()

        response = client.options("/api", headers=self.PREFLIGHT_HEADERS)

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers

    def test_restricted_origins(self):
        client = build_client(cors_origins=["https://admin.example.com"])

        response = client.options("/api", headers=self.PREFLIGHT_HEADERS)

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    def test_disabled(self):
        client = build_client(cors_enabled=False)

        response = client.options("/api", headers=self.PREFLIGHT_HEADERS)

        assert "access-control-allow-origin" not in response.headers


class TestLifespan:
    def test_connects_on_startup_when_configured(self, connector):
        with build_client(db_connect_on_startup=True) as client:
            assert client.get("/health").json()["database"] == "connected"

        assert connector.calls == 1
        connector.client.close.assert_awaited_once()

    def test_lazy_by_default(self, connector):
        with build_client() as client:
            assert client.get("/health").json()["database"] == "uninitialized"

        assert connector.calls == 0

    def test_startup_fails_when_store_unreachable(self):
        reset_connection(
            connector=CountingConnector(error=OperationFailure("bad auth")),
            config_factory=make_config,
        )

        with pytest.raises(Exception):
            with build_client(db_connect_on_startup=True):
                pass
