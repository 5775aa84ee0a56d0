"""
Boundary tests: error body shape, status mapping, and service routes.

Run: pytest gridops/test_main.py -v
"""

import pytest

from gridops.errors import (
    AuthenticationFailure,
    DuplicateUsername,
    IllegalStatusTransition,
    InvalidCredentials,
    InvalidToken,
    NotFound,
    Unexpected,
    ValidationFailure,
    public_message,
    status_code_for,
)


class TestErrorMapping:
    @pytest.mark.parametrize("error,status", [
        (AuthenticationFailure(), 401),
        (InvalidToken("token expired"), 401),
        (InvalidCredentials(), 401),
        (ValidationFailure(), 400),
        (DuplicateUsername("taken"), 400),
        (IllegalStatusTransition("no"), 400),
        (NotFound("Asset"), 404),
        (Unexpected(), 500),
    ])
    def test_status_codes(self, error, status):
        assert status_code_for(error) == status

    def test_auth_detail_never_leaks(self):
        assert public_message(InvalidToken("token expired")) == "unauthorized"

    def test_validation_detail_is_generic(self):
        assert public_message(DuplicateUsername("username already registered")) == "invalid input"

    def test_not_found_names_the_resource(self):
        assert public_message(NotFound("Checklist task")) == "Checklist task not found"


class TestServiceRoutes:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_root_redirects_to_docs(self, client):
        response = client.get("/", follow_redirects=False)
        assert response.status_code in (302, 307)
        assert response.headers["location"] == "/docs"

    def test_unknown_route_uses_message_body(self, client):
        response = client.get("/api/nothing-here")
        assert response.status_code == 404
        assert set(response.json()) == {"message"}

    def test_wrong_method_uses_message_body(self, client):
        response = client.patch("/user", json={})
        assert response.status_code == 405
        assert set(response.json()) == {"message"}

    def test_malformed_json_is_invalid_input(self, client, signup):
        response = client.post(
            "/api/asset",
            content=b"{not json",
            headers={**signup("alice"), "Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json() == {"message": "invalid input"}
