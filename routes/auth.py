"""Users blueprint: registration, sessions, profile and avatar endpoints."""

from __future__ import annotations

import uuid
from http import HTTPStatus

from flask import Blueprint, current_app, g, jsonify, request, send_file
from werkzeug.datastructures import FileStorage

from errors import ResourceNotFound, ValidationFailed
from schemas import SubscriptionUpdate, UserCredentials
from services import users
from storage.local_storage import LocalAvatarStorage
from utils.auth import auth_required, current_identity
from utils.request_validation import parse_json_request, validate_payload

auth_bp = Blueprint("auth", __name__)


def _avatar_storage() -> LocalAvatarStorage:
    return LocalAvatarStorage(
        current_app.config.get("PUBLIC_DIR"),
        current_app.config.get("AVATAR_SIZE"),
    )


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple:
    """Register a new user and send the verification email."""
    credentials = validate_payload(UserCredentials, parse_json_request(request))
    user = users.register(credentials.email, credentials.password)
    return (
        jsonify({"user": user.to_public_dict(include_avatar=True)}),
        HTTPStatus.CREATED,
    )


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple:
    """Authenticate a verified user and return a session token."""
    credentials = validate_payload(UserCredentials, parse_json_request(request))
    token, user = users.login(credentials.email, credentials.password)
    return (
        jsonify({"token": token, "user": user.to_public_dict()}),
        HTTPStatus.OK,
    )


@auth_bp.route("/logout", methods=["POST"])
@auth_required
def logout() -> tuple:
    """Clear the caller's session token."""
    users.logout(current_identity(), g.session_token)
    return "", HTTPStatus.NO_CONTENT


@auth_bp.route("/current", methods=["GET"])
@auth_required
def current_user() -> tuple:
    """Return the caller's public profile."""
    user = users.get_user(current_identity())
    return jsonify(user.to_public_dict()), HTTPStatus.OK


@auth_bp.route("/", methods=["POST"])
@auth_required
def update_subscription() -> tuple:
    """Change the caller's subscription tier."""
    data = validate_payload(SubscriptionUpdate, parse_json_request(request))
    user = users.update_subscription(current_identity(), data.subscription)
    return jsonify(user.to_public_dict()), HTTPStatus.OK


@auth_bp.route("/avatars", methods=["GET"])
@auth_required
def get_avatar():
    """Send the caller's stored avatar image."""
    user = users.get_user(current_identity())
    if user.avatar_url is None:
        raise ResourceNotFound("Avatar not found")

    storage = _avatar_storage()
    if not storage.exists(user.avatar_url):
        raise ResourceNotFound("Avatar not found")
    return send_file(storage.resolve(user.avatar_url))


@auth_bp.route("/avatars", methods=["PATCH"])
@auth_required
def upload_avatar() -> tuple:
    """Replace the caller's avatar with a resized copy of the uploaded image."""
    identity = current_identity()

    file = request.files.get("avatar")
    if not isinstance(file, FileStorage) or not (file.filename or "").strip():
        raise ValidationFailed("An avatar file is required.")

    storage = _avatar_storage()
    previous = users.get_user(identity).avatar_url
    try:
        avatar_url = storage.save(file, f"{identity.id}-{uuid.uuid4().hex}")
    except ValueError as exc:
        raise ValidationFailed(str(exc)) from exc

    user = users.update_avatar(identity, avatar_url)
    if previous and previous != avatar_url:
        storage.delete(previous)
    return jsonify({"avatarURL": user.avatar_url}), HTTPStatus.OK
