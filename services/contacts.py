"""Contact storage scoped to a single owner."""

from __future__ import annotations

from models import db
from models.contact import Contact

CONTACT_FIELDS = ("name", "email", "phone", "favorite")


class ContactRepository:
    """CRUD over the contacts of one user.

    Every statement is built from :meth:`_scoped`, so a contact id that belongs
    to someone else is indistinguishable from one that does not exist.
    """

    def __init__(self, owner_id: int) -> None:
        self.owner_id = owner_id

    def _scoped(self):
        return Contact.query.filter_by(owner_id=self.owner_id)

    def _filtered(self, favorite: bool | None):
        query = self._scoped()
        if favorite is not None:
            query = query.filter(Contact.favorite.is_(favorite))
        return query

    def list(self, favorite: bool | None = None, page: int = 1, limit: int = 20) -> list[Contact]:
        offset = (page - 1) * limit
        return (
            self._filtered(favorite)
            .order_by(Contact.id.asc())
            .offset(offset)
            .limit(limit)
            .all()
        )

    def count(self, favorite: bool | None = None) -> int:
        return self._filtered(favorite).count()

    def get(self, contact_id: int) -> Contact | None:
        return self._scoped().filter_by(id=contact_id).first()

    def add(self, data: dict) -> Contact:
        values = {field: data[field] for field in CONTACT_FIELDS if field in data}
        contact = Contact(owner_id=self.owner_id, **values)
        db.session.add(contact)
        db.session.commit()
        return contact

    def update(self, contact_id: int, data: dict) -> Contact | None:
        values = {
            getattr(Contact, field): data[field]
            for field in CONTACT_FIELDS
            if field in data
        }
        if not values:
            return self.get(contact_id)

        updated = self._scoped().filter_by(id=contact_id).update(
            values, synchronize_session=False
        )
        db.session.commit()
        if not updated:
            return None
        return self.get(contact_id)

    def update_status(self, contact_id: int, favorite: bool) -> Contact | None:
        return self.update(contact_id, {"favorite": favorite})

    def remove(self, contact_id: int) -> dict | None:
        """Delete a contact and return its serialized form."""

        contact = self.get(contact_id)
        if contact is None:
            return None
        removed = contact.to_dict()
        deleted = self._scoped().filter_by(id=contact_id).delete(
            synchronize_session=False
        )
        db.session.commit()
        if not deleted:
            return None
        return removed
