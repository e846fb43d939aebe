"""Contact model definition."""

from datetime import datetime

from . import db


class Contact(db.Model):
    """A single address-book entry owned by one user."""

    __tablename__ = "contacts"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(32), nullable=False)
    favorite = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    owner_id = db.Column(
        db.Integer,
        db.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    owner = db.relationship("User", back_populates="contacts")

    def __repr__(self) -> str:
        return f"<Contact id={self.id} owner_id={self.owner_id}>"

    def to_dict(self) -> dict:
        """Serialize the contact into a dictionary."""

        return {
            "id": self.id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "favorite": self.favorite,
            "owner": self.owner_id,
        }
