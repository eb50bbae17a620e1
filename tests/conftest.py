import pytest
from flask import Flask, jsonify, request

from sanitizable import DB, Sanitize, handle_sanitize_errors
from sample_models import Book, User


@pytest.fixture(autouse=True)
def _reset_sanitize_config(monkeypatch: pytest.MonkeyPatch) -> None:
    # the Sanitize class attributes are the defaults shared by all apps
    monkeypatch.setattr(Sanitize, "SANITIZE_COLLAPSE_LOOKUP_ERRORS", None)
    monkeypatch.setattr(Sanitize, "SANITIZE_PATCH_PREVALIDATE", None)
    monkeypatch.delenv("SANITIZE_COLLAPSE_LOOKUP_ERRORS", raising=False)
    monkeypatch.delenv("SANITIZE_PATCH_PREVALIDATE", raising=False)


def _add_routes(app: Flask) -> None:
    @app.route("/users", methods=["POST"])
    @handle_sanitize_errors
    def create_user():
        user = request.extract_model(User)
        DB.session.add(user)
        DB.session.commit()
        return jsonify(user.to_json()), 201

    @app.route("/users/<user_id>", methods=["PATCH"])
    @handle_sanitize_errors
    def patch_user(user_id):
        user = DB.session.merge(request.patch_model_by_id(User, user_id))
        DB.session.commit()
        return jsonify(user.to_json())

    @app.route("/users/<int:user_id>/books", methods=["POST"])
    @handle_sanitize_errors
    def create_book(user_id):
        book = request.extract_model(Book, injecting={"owner_id": user_id})
        DB.session.add(book)
        DB.session.commit()
        return jsonify(book.to_json()), 201


@pytest.fixture
def app():
    app = Flask("sanitizable_tests")
    app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
    app.config["TESTING"] = True
    DB.init_app(app)
    Sanitize(app)
    _add_routes(app)

    with app.app_context():
        DB.create_all()
        yield app
        DB.session.remove()
        DB.drop_all()


@pytest.fixture
def client(app: Flask):
    return app.test_client()


@pytest.fixture
def ana(app: Flask) -> User:
    user = User(name="Ana", email="a@x.com")
    DB.session.add(user)
    DB.session.commit()
    return user
