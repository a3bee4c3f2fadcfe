"""Reward catalog and redemption endpoints."""

from __future__ import annotations

from flask import Blueprint, current_app, jsonify, request
from werkzeug.exceptions import BadRequest

from storage import get_storage
from utils.request_validation import redemption_payload

rewards_bp = Blueprint("rewards", __name__)


@rewards_bp.route("", methods=["GET"])
def list_rewards():
    return jsonify([reward.to_dict() for reward in get_storage().list_rewards()])


@rewards_bp.route("/redeem", methods=["POST"])
def redeem_reward():
    """Spend a user's points on a catalog reward."""

    user_id, reward_id = redemption_payload(request)
    storage = get_storage()

    if not storage.redeem_reward(user_id, reward_id):
        current_app.logger.warning(
            "Redemption of reward %s by user %s refused", reward_id, user_id
        )
        raise BadRequest("Unable to redeem reward")

    user = storage.get_user(user_id)
    current_app.logger.info(
        "User %s redeemed reward %s, balance now %s",
        user_id,
        reward_id,
        user.green_points if user else None,
    )
    return jsonify({"success": True, "user": user.to_dict() if user else None})
