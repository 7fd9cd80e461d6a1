from __future__ import annotations

import logging

from flask import Flask, jsonify, session

from ..common.web import (
    capability_required,
    current_actor,
    json_error,
    login_required,
    login_session,
    request_payload,
)
from ..container import Container
from ..core.enums import Capability, Role
from .service import parse_role

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/login", methods=["POST"], endpoint="login")
    def login():
        payload = request_payload()
        s_user = container.auth_service.authenticate(payload.get("username", ""), payload.get("password", ""))
        login_session(s_user, remember=bool(payload.get("remember_me")))
        logger.info("User %r logged in", s_user.username)
        return jsonify(
            {
                "success": True,
                "user": {
                    "user_id": s_user.user_id,
                    "username": s_user.username,
                    "role": s_user.role.value,
                    "capabilities": session["capabilities"],
                },
            }
        )

    @app.route("/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/register", methods=["POST"], endpoint="register")
    def register_account():
        payload = request_payload()
        user = container.user_service.register(
            username=payload.get("username", ""),
            password=payload.get("password", ""),
            role=parse_role(payload.get("role") or Role.EMPLOYEE.value),
        )
        return jsonify({"success": True, "user": {"user_id": user.user_id, "username": user.username, "role": user.role.value}}), 201

    @app.route("/me", endpoint="me")
    @login_required
    def me():
        actor = current_actor()
        return jsonify(
            {
                "user_id": actor.user_id,
                "username": actor.username,
                "role": actor.role.value,
                "capabilities": sorted(c.value for c in actor.capabilities),
            }
        )

    @app.route("/users", endpoint="list_users")
    @capability_required(Capability.MANAGE_USERS)
    def list_users():
        return jsonify({"users": container.user_service.list_admin_view(current_actor())})

    @app.route("/users", methods=["POST"], endpoint="add_user")
    @capability_required(Capability.MANAGE_USERS)
    def add_user():
        payload = request_payload()
        if not payload.get("role"):
            return json_error("Role is required", 400)
        user = container.user_service.create_account(
            current_actor(),
            username=payload.get("username", ""),
            password=payload.get("password", ""),
            role=parse_role(payload.get("role")),
        )
        return jsonify({"success": True, "user": {"user_id": user.user_id, "username": user.username, "role": user.role.value}}), 201

    @app.route("/users/<user_id>", methods=["PUT"], endpoint="edit_user")
    @capability_required(Capability.MANAGE_USERS)
    def edit_user(user_id: str):
        payload = request_payload()
        role = parse_role(payload["role"]) if payload.get("role") else None
        user = container.user_service.update_account(
            current_actor(),
            user_id,
            username=payload.get("username"),
            password=payload.get("password") or None,
            role=role,
        )
        return jsonify({"success": True, "user": {"user_id": user.user_id, "username": user.username, "role": user.role.value}})

    @app.route("/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @capability_required(Capability.MANAGE_USERS)
    def delete_user(user_id: str):
        container.user_service.delete_user(current_actor(), user_id)
        return jsonify({"success": True, "message": "User deleted"})
