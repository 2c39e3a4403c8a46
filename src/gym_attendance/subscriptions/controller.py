from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body
from ..common.validators import require_non_empty
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/subscriptions", methods=["POST"], endpoint="subscriptions_create")
    def create_subscription():
        user_id = require_non_empty(json_body().get("userId"), "userId")
        subscription = container.subscription_service.create_for_user(user_id)
        return jsonify(subscription.to_dict()), 201

    @app.route("/api/subscriptions/user/<user_id>", methods=["GET"], endpoint="subscriptions_for_user")
    def get_for_user(user_id: str):
        return jsonify(container.subscription_service.get_for_user(user_id).to_dict()), 200

    @app.route(
        "/api/subscriptions/<subscription_id>/memberships",
        methods=["POST"],
        endpoint="subscriptions_add_membership",
    )
    def add_membership(subscription_id: str):
        membership_id = require_non_empty(json_body().get("membershipId"), "membershipId")
        subscription = container.subscription_service.add_membership(subscription_id, membership_id)
        return jsonify(subscription.to_dict()), 200
