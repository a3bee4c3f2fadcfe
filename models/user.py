"""User model definition."""

import uuid
from datetime import datetime

from werkzeug.security import generate_password_hash

from storage.records import USER_ROLES, UserRecord

from . import db


class User(db.Model):
    """Represents a citizen, verifier or administrator account."""

    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    role = db.Column(
        db.Enum(*USER_ROLES, name="user_role"),
        nullable=False,
        default="citizen",
    )
    address = db.Column(db.Text, nullable=True)
    zone = db.Column(db.String(120), nullable=True, index=True)
    green_points = db.Column(
        db.Integer,
        nullable=False,
        default=0,
        server_default=db.text("0"),
    )
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        self.password_hash = generate_password_hash(password)

    def to_record(self) -> UserRecord:
        """Detach the row into an immutable record."""

        return UserRecord(
            id=self.id,
            email=self.email,
            password_hash=self.password_hash,
            name=self.name,
            role=self.role,
            address=self.address,
            zone=self.zone,
            green_points=self.green_points or 0,
            created_at=self.created_at,
        )

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
