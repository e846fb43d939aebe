"""Seed a verified demo user with a couple of contacts."""

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app
from models import db
from models.contact import Contact
from models.user import User

DEMO_EMAIL = "demo@contacts.dev"
DEMO_PASSWORD = "DemoPass123"

DEMO_CONTACTS = [
    {"name": "Allen Raymond", "email": "allen@vestibul.co.uk", "phone": "(992) 914-3792"},
    {"name": "Kennedy Lane", "email": "kennedy@vestibul.co.uk", "phone": "(542) 451-7038", "favorite": True},
]


def main() -> None:
    app = create_app()
    with app.app_context():
        user = User.query.filter_by(email=DEMO_EMAIL).first()
        if user is None:
            user = User(email=DEMO_EMAIL, verify=True)
            user.set_password(DEMO_PASSWORD)
            db.session.add(user)
            db.session.flush()
            for data in DEMO_CONTACTS:
                db.session.add(Contact(owner_id=user.id, **data))
            action = "created"
        else:
            user.verify = True
            user.verification_token = None
            user.set_password(DEMO_PASSWORD)
            action = "updated"
        db.session.commit()
        print(f"Demo user {action}: {DEMO_EMAIL}")


if __name__ == "__main__":
    main()
