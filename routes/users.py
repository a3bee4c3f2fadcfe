"""User lookup endpoints."""

from __future__ import annotations

from flask import Blueprint, jsonify
from werkzeug.exceptions import NotFound

from storage import get_storage

users_bp = Blueprint("users", __name__)


@users_bp.route("/<user_id>", methods=["GET"])
def get_user(user_id: str):
    """Return a user's public profile and point balance."""

    user = get_storage().get_user(user_id)
    if user is None:
        raise NotFound("User not found")
    return jsonify(user.to_dict())
