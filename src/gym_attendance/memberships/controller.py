from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/memberships", methods=["GET"], endpoint="memberships_list")
    def list_memberships():
        return jsonify([m.to_dict() for m in container.membership_service.list_active()]), 200

    @app.route("/api/memberships/<membership_id>", methods=["GET"], endpoint="memberships_get")
    def get_membership(membership_id: str):
        return jsonify(container.membership_service.get(membership_id).to_dict()), 200
