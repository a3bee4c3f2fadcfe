"""Seed demo accounts into the SQL storage backend."""

from __future__ import annotations

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app
from config import Config
from storage import get_storage

DEMO_ZONE = "Ward 15"
DEMO_USERS = (
    {
        "email": "admin@example.com",
        "password": "AdminPass123",
        "name": "City Admin",
        "role": "admin",
    },
    {
        "email": "champion@example.com",
        "password": "ChampionPass123",
        "name": "Green Champion",
        "role": "verifier",
        "zone": DEMO_ZONE,
    },
    {
        "email": "citizen@example.com",
        "password": "CitizenPass123",
        "name": "Demo Citizen",
        "role": "citizen",
        "address": "12 MG Road",
        "zone": DEMO_ZONE,
    },
)


class SeedConfig(Config):
    STORAGE_BACKEND = "sql"


def main() -> None:
    app = create_app(SeedConfig)
    with app.app_context():
        storage = get_storage()
        for data in DEMO_USERS:
            if storage.get_user_by_email(data["email"]) is not None:
                print(f"{data['role']} exists: {data['email']}")
                continue
            user = storage.create_user(data)
            print(f"{user.role} created: {user.email} ({user.green_points} points)")


if __name__ == "__main__":
    main()
