"""User model definition."""

from datetime import datetime

from services.passwords import hash_password, verify_password

from . import db


SUBSCRIPTION_TIERS = ("starter", "pro", "business")


class User(db.Model):
    """Represents an account owning a list of contacts."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    # Always stored lowercase.
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    subscription = db.Column(
        db.Enum(*SUBSCRIPTION_TIERS, name="subscription_tier"),
        nullable=False,
        default="starter",
        server_default=db.text("'starter'"),
    )
    avatar_url = db.Column(db.String(512), nullable=True)
    verify = db.Column(
        db.Boolean,
        nullable=False,
        default=False,
        server_default=db.false(),
    )
    verification_token = db.Column(db.String(64), unique=True, nullable=True, index=True)
    token = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    contacts = db.relationship(
        "Contact",
        back_populates="owner",
        cascade="all, delete-orphan",
    )

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = hash_password(password)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return verify_password(password, self.password_hash)

    def to_public_dict(self, include_avatar: bool = False) -> dict:
        """Serialize the fields that may leave the service."""

        data = {"email": self.email, "subscription": self.subscription}
        if include_avatar:
            data["avatarURL"] = self.avatar_url
        return data

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
