#!/usr/bin/env python
#
# Users and their Books: create, patch and create-with-injected-owner endpoints
#
# run:
#   python demo.py [HOST] [PORT]
# try:
#   curl -X POST localhost:5000/users -H "Content-Type: application/json" -d '{"name": "Ana", "role": "admin"}'
#   curl -X PATCH localhost:5000/users/1 -H "Content-Type: application/json" -d '{"email": "ana@x.com"}'
#   curl -X POST localhost:5000/users/1/books -H "Content-Type: application/json" -d '{"title": "Dune", "owner_id": 2}'
#
import sys
import datetime
from flask import Flask, jsonify, request
from sanitizable import DB, Sanitize, SanitizableBase, ValidationError, MissingFieldError, NotFoundError, handle_sanitize_errors


class User(SanitizableBase, DB.Model):
    """
    description: User description
    """

    __tablename__ = "Users"
    id = DB.Column(DB.Integer, primary_key=True)
    name = DB.Column(DB.String, nullable=False)
    email = DB.Column(DB.String, default="")
    role = DB.Column(DB.String, default="user")
    created = DB.Column(DB.DateTime, default=datetime.datetime.now)
    exclude_attrs = ["role", "created"]

    def post_validate(self):
        if self.email and "@" not in self.email:
            raise ValidationError(f"Invalid email address {self.email}")


class Book(SanitizableBase, DB.Model):
    """
    description: Book description
    """

    __tablename__ = "Books"
    id = DB.Column(DB.Integer, primary_key=True)
    title = DB.Column(DB.String, nullable=False)
    owner_id = DB.Column(DB.Integer, DB.ForeignKey("Users.id"))
    permitted = frozenset({"title"})

    @classmethod
    def update_thrown_error(cls, error):
        if isinstance(error, MissingFieldError):
            return ValidationError("A book needs a title")
        return super().update_thrown_error(error)


def create_app():
    app = Flask("demo_app")
    app.config.update(SQLALCHEMY_DATABASE_URI="sqlite://", DEBUG=True)
    DB.init_app(app)
    Sanitize(app)

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
        if User.find(user_id) is None:
            raise NotFoundError(f"User {user_id}")
        book = request.extract_model(Book, injecting={"owner_id": user_id})
        DB.session.add(book)
        DB.session.commit()
        return jsonify(book.to_json()), 201

    with app.app_context():
        DB.create_all()

    return app


# address where the api will be hosted, change this if you're not running the app on localhost!
HOST = sys.argv[1] if sys.argv[1:] else "127.0.0.1"
PORT = int(sys.argv[2]) if len(sys.argv) > 2 else 5000

if __name__ == "__main__":
    app = create_app()
    app.run(host=HOST, port=PORT)
