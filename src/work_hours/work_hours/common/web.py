from __future__ import annotations

import logging
from functools import wraps
from typing import Optional

from flask import Flask, current_app, g, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Capability
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..users.model import SessionUser

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def request_payload() -> dict:
    """JSON body if present, form fields otherwise."""
    data = request.get_json(silent=True)
    if isinstance(data, dict):
        return data
    return request.form.to_dict()


def login_session(user: SessionUser, *, remember: bool = False) -> None:
    session.clear()
    session.permanent = remember
    session["user_id"] = user.user_id
    session["username"] = user.username
    session["role"] = user.role.value
    session["capabilities"] = sorted(c.value for c in user.capabilities)


def _load_actor() -> Optional[SessionUser]:
    user_id = session.get("user_id")
    if user_id is None:
        return None
    container = current_app.extensions["work_hours"]
    user = container.users_repo.get_by_id(user_id)
    if user is None:
        logger.info("Session for removed user %r cleared", session.get("username"))
        session.clear()
        return None

    actor = SessionUser.from_user(user)
    # Role or username may have changed since login.
    if session.get("role") != actor.role.value or session.get("username") != actor.username:
        login_session(actor, remember=session.permanent)
    return actor


def current_actor() -> Optional[SessionUser]:
    """The logged-in user as currently stored, resolved once per request."""
    if "actor" not in g:
        g.actor = _load_actor()
    return g.actor


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if current_actor() is None:
            return json_error("Please log in to continue", 401)
        return view(*args, **kwargs)

    return wrapper


def capability_required(capability: Capability):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            actor = current_actor()
            if actor is None:
                return json_error("Please log in to continue", 401)
            if not actor.can(capability):
                return json_error("You do not have permission for this action", 403)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                return json_error(str(e), status)
        return json_error(str(e), 400)

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        if isinstance(e, HTTPException):
            return json_error(e.description or e.name, e.code or 500)
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if app.config.get("DEBUG"):
            return json_error(f"Internal error: {e}", 500)
        return json_error("Internal error", 500)
