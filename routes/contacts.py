"""Contacts blueprint. Every route works on the caller's own contacts only."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app, jsonify, request

from errors import ResourceNotFound, ValidationFailed
from schemas import ContactCreate, ContactListQuery, ContactUpdate, FavoriteUpdate
from services.contacts import ContactRepository
from utils.auth import auth_required, current_identity
from utils.request_validation import parse_json_request, validate_payload

contacts_bp = Blueprint("contacts", __name__)

# Largest value a SQL INTEGER primary key can hold; bigger ids never match.
CONTACT_ID = "<int(max=9223372036854775807):contact_id>"


def _repository() -> ContactRepository:
    return ContactRepository(current_identity().id)


@contacts_bp.route("", methods=["GET"])
@auth_required
def list_contacts():
    """Return the caller's contacts, optionally only favorites, one page at a time."""

    params = {"limit": current_app.config.get("CONTACTS_PAGE_LIMIT", 20)}
    params.update(request.args.to_dict())
    query = validate_payload(ContactListQuery, params)
    contacts = _repository().list(
        favorite=query.favorite, page=query.page, limit=query.limit
    )
    # An empty page is reported as 404, matching the existing API contract.
    if not contacts:
        raise ResourceNotFound()
    return jsonify([contact.to_dict() for contact in contacts])


@contacts_bp.route(f"/{CONTACT_ID}", methods=["GET"])
@auth_required
def get_contact(contact_id: int):
    """Return one of the caller's contacts."""
    contact = _repository().get(contact_id)
    if contact is None:
        raise ResourceNotFound()
    return jsonify(contact.to_dict())


@contacts_bp.route("", methods=["POST"])
@auth_required
def create_contact():
    """Create a contact owned by the caller."""
    data = validate_payload(ContactCreate, parse_json_request(request))
    contact = _repository().add(data.model_dump())
    return jsonify(contact.to_dict()), HTTPStatus.CREATED


@contacts_bp.route(f"/{CONTACT_ID}", methods=["PUT"])
@auth_required
def update_contact(contact_id: int):
    """Change one or more fields of a contact."""
    payload = parse_json_request(request, allow_empty=True)
    changes = validate_payload(ContactUpdate, payload).model_dump(exclude_none=True)
    if not changes:
        raise ValidationFailed("Body must have at least one field")

    contact = _repository().update(contact_id, changes)
    if contact is None:
        raise ResourceNotFound()
    return jsonify(contact.to_dict())


@contacts_bp.route(f"/{CONTACT_ID}/favorite", methods=["PATCH"])
@auth_required
def update_status_contact(contact_id: int):
    """Set or clear the favorite flag."""
    data = validate_payload(FavoriteUpdate, parse_json_request(request))
    contact = _repository().update_status(contact_id, data.favorite)
    if contact is None:
        raise ResourceNotFound()
    return jsonify(contact.to_dict())


@contacts_bp.route(f"/{CONTACT_ID}", methods=["DELETE"])
@auth_required
def delete_contact(contact_id: int):
    """Delete a contact and return what was removed."""
    removed = _repository().remove(contact_id)
    if removed is None:
        raise ResourceNotFound()
    return jsonify(removed)
