import pytest
from flask import Flask, request

from sanitizable import DB, MissingBodyError, NotFoundError, Sanitize, SanitizeRequest
from sanitizable.config import get_flag
from sample_models import User


def test_sanitize_installs_request_class(app: Flask) -> None:
    assert app.request_class is SanitizeRequest
    assert app.extensions["sanitizable"].db is DB


def _config_app(name: str, **config) -> Flask:
    app = Flask(name)
    app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
    app.config.update(config)
    DB.init_app(app)
    return app


def test_sanitize_config_is_per_app() -> None:
    configured = _config_app("configured", SANITIZE_PATCH_PREVALIDATE=True)
    Sanitize(configured)
    with_options = _config_app("with_options")
    Sanitize(with_options, SANITIZE_COLLAPSE_LOOKUP_ERRORS=True)
    plain = _config_app("plain")
    Sanitize(plain)

    with configured.app_context():
        assert get_flag("SANITIZE_PATCH_PREVALIDATE") is True
        assert get_flag("SANITIZE_COLLAPSE_LOOKUP_ERRORS") is False
    with with_options.app_context():
        assert get_flag("SANITIZE_COLLAPSE_LOOKUP_ERRORS") is True
        assert get_flag("SANITIZE_PATCH_PREVALIDATE") is False
    with plain.app_context():
        assert get_flag("SANITIZE_PATCH_PREVALIDATE") is False
        assert get_flag("SANITIZE_COLLAPSE_LOOKUP_ERRORS") is False
    assert Sanitize.SANITIZE_PATCH_PREVALIDATE is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"data": "not json", "content_type": "application/json"},
        {"data": '{"name": "Ana"}', "content_type": "text/plain"},
        {"json": ["name", "Ana"]},
    ],
)
def test_json_body_is_none_without_json_object(app: Flask, kwargs: dict) -> None:
    with app.test_request_context("/users", method="POST", **kwargs):
        assert request.json_body is None
        with pytest.raises(MissingBodyError):
            request.extract_model(User)


def test_request_extract_model(app: Flask) -> None:
    with app.test_request_context("/users", method="POST", json={"name": "Ana", "role": "admin"}):
        user = request.extract_model(User, injecting={"email": "server@x.com"})

    assert (user.name, user.email, user.role) == ("Ana", "server@x.com", None)


def test_request_patch_model(app: Flask, ana: User) -> None:
    with app.test_request_context(f"/users/{ana.id}", method="PATCH", json={"email": "b@y.com", "hacked": "x"}):
        patched = request.patch_model(ana)

    assert patched.to_json() == dict(ana.to_json(), email="b@y.com")
    assert patched.exists is True


def test_request_patch_model_by_id_not_found(app: Flask) -> None:
    with app.test_request_context("/users/42", method="PATCH", json={"email": "b@y.com"}):
        with pytest.raises(NotFoundError):
            request.patch_model_by_id(User, "42")


def test_create_route(client, app: Flask) -> None:
    response = client.post("/users", json={"name": "Ana", "role": "admin", "id": 7})

    assert response.status_code == 201
    body = response.get_json()
    assert body["name"] == "Ana"
    assert body["role"] == "user"
    assert body["id"] != 7


def test_create_route_missing_body(client) -> None:
    response = client.post("/users", data="Ana")

    assert response.status_code == 400
    assert response.get_json()["errors"][0]["code"] == "400"


def test_create_route_construction_error(client) -> None:
    response = client.post("/users", json={"email": "a@x.com"})

    assert response.status_code == 400
    assert '"name"' in response.get_json()["errors"][0]["title"]
    assert DB.session.query(User).count() == 0


def test_patch_route(client, ana: User) -> None:
    response = client.patch(f"/users/{ana.id}", json={"email": "b@y.com", "role": "admin"})

    assert response.status_code == 200
    assert response.get_json()["email"] == "b@y.com"
    user = DB.session.get(User, ana.id)
    assert (user.email, user.role) == ("b@y.com", "user")


def test_patch_route_not_found(client) -> None:
    response = client.patch("/users/42", json={"email": "b@y.com"})

    assert response.status_code == 404
    assert response.get_json()["errors"][0]["code"] == "404"


def test_create_book_route_injects_owner(client, ana: User) -> None:
    response = client.post(f"/users/{ana.id}/books", json={"title": "Dune", "owner_id": 999})

    assert response.status_code == 201
    assert response.get_json()["owner_id"] == ana.id


def test_create_book_route_translated_error(client, ana: User) -> None:
    response = client.post(f"/users/{ana.id}/books", json={"pages": 10})

    assert response.status_code == 400
    assert "a book needs a title" in response.get_json()["errors"][0]["title"]
