"""Authentication blueprint providing register and login endpoints."""

from __future__ import annotations
from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import create_access_token, get_jwt_identity, jwt_required
from werkzeug.exceptions import BadRequest, NotFound, Unauthorized

from storage import DuplicateEmailError, get_storage
from utils.request_validation import login_payload, registration_payload

auth_bp = Blueprint("auth", __name__)


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a citizen, verifier or admin account."""
    user_data = registration_payload(request)
    storage = get_storage()

    if storage.get_user_by_email(user_data["email"]) is not None:
        raise BadRequest("User already exists")

    try:
        user = storage.create_user(user_data)
    except DuplicateEmailError as exc:
        raise BadRequest("User already exists") from exc

    current_app.logger.info("Registered %s user %s", user.role, user.id)
    token = create_access_token(identity=user.id)
    return (
        jsonify({"access_token": token, "user": user.to_dict()}),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Check credentials and return the user with a JWT access token."""
    email, password = login_payload(request)

    user = get_storage().get_user_by_email(email)
    if user is None or not user.check_password(password):
        current_app.logger.warning("Failed login attempt for %s", email)
        raise Unauthorized("Invalid credentials")

    token = create_access_token(identity=user.id)
    return (
        jsonify({"access_token": token, "user": user.to_dict()}),
        HTTPStatus.OK,
    )


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def current_user() -> tuple:
    """Return the freshest server copy of the token holder."""
    user = get_storage().get_user(get_jwt_identity())
    if user is None:
        raise NotFound("User not found")
    return jsonify(user.to_dict()), HTTPStatus.OK
