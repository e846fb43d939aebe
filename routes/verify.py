"""Verification blueprint for confirming and resending email links."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from schemas import EmailOnly
from services import verification
from utils.request_validation import parse_json_request, validate_payload

verify_bp = Blueprint("verify", __name__)


@verify_bp.route("/verify/<string:verification_token>", methods=["GET"])
def confirm_email(verification_token: str):
    """Redeem a verification link."""

    verification.confirm(verification_token)
    return jsonify({"message": "Verification successful"}), HTTPStatus.OK


@verify_bp.route("/verify", methods=["POST"])
def resend_verification():
    """Send the verification link again to an unverified address."""

    data = validate_payload(EmailOnly, parse_json_request(request))
    verification.resend(data.email)
    return jsonify({"message": "Verification email sent"}), HTTPStatus.OK
