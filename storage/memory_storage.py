"""Volatile in-process storage backend."""

from __future__ import annotations

import threading
import uuid
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Mapping, Optional

from werkzeug.security import generate_password_hash

from .abstract_storage import AbstractStorage
from .errors import DuplicateEmailError
from .records import (
    DEFAULT_REWARDS,
    ReportRecord,
    RewardRecord,
    UserRecord,
    points_for_category,
    starting_points,
)


def _new_id() -> str:
    return str(uuid.uuid4())


class MemoryStorage(AbstractStorage):
    """Keep users, reports and rewards in dictionaries keyed by UUID.

    Nothing survives the process. Balance changes for a user run under that
    user's lock so a redemption's check and debit cannot interleave with
    another balance change.
    """

    def __init__(self, rewards: Iterable[Mapping[str, object]] | None = None):
        self._users: dict[str, UserRecord] = {}
        self._reports: dict[str, ReportRecord] = {}
        self._rewards: dict[str, RewardRecord] = {}
        # Guards inserts into and snapshots of the collections. Never acquire a
        # per-user lock while holding it.
        self._data_lock = threading.Lock()
        self._registry_lock = threading.Lock()
        self._user_locks: dict[str, threading.Lock] = {}
        self._seed_rewards(DEFAULT_REWARDS if rewards is None else rewards)

    def _seed_rewards(self, catalog: Iterable[Mapping[str, object]]) -> None:
        for entry in catalog:
            reward = RewardRecord(
                id=str(entry.get("id") or _new_id()),
                name=str(entry["name"]),
                description=str(entry.get("description") or ""),
                cost=int(entry["cost"]),
                category=str(entry.get("category") or ""),
            )
            self._rewards[reward.id] = reward

    def _lock_for(self, user_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._user_locks.get(user_id)
            if lock is None:
                lock = self._user_locks[user_id] = threading.Lock()
            return lock

    def _user_snapshot(self) -> list[UserRecord]:
        with self._data_lock:
            return list(self._users.values())

    def _report_snapshot(self) -> list[ReportRecord]:
        with self._data_lock:
            return list(self._reports.values())

    # Users

    def create_user(self, data: Mapping[str, object]) -> UserRecord:
        email = str(data["email"])
        role = str(data["role"])
        user = UserRecord(
            id=_new_id(),
            email=email,
            password_hash=generate_password_hash(str(data["password"])),
            name=str(data["name"]),
            role=role,
            address=data.get("address") or None,
            zone=data.get("zone") or None,
            green_points=starting_points(role),
            created_at=datetime.utcnow(),
        )
        with self._data_lock:
            if any(existing.email == email for existing in self._users.values()):
                raise DuplicateEmailError(email)
            self._users[user.id] = user
        return user

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        with self._data_lock:
            return self._users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        return next(
            (user for user in self._user_snapshot() if user.email == email), None
        )

    def _apply_points(self, user_id: str, delta: int) -> Optional[UserRecord]:
        with self._data_lock:
            user = self._users.get(user_id)
            if user is None:
                return None
            updated = user.with_points(user.green_points + delta)
            self._users[user_id] = updated
        return updated

    def update_user_points(self, user_id: str, delta: int) -> Optional[UserRecord]:
        with self._lock_for(user_id):
            return self._apply_points(user_id, delta)

    # Reports

    def create_report(self, data: Mapping[str, object]) -> ReportRecord:
        report = ReportRecord(
            id=_new_id(),
            user_id=str(data["user_id"]),
            category=str(data["category"]),
            location=str(data["location"]),
            description=data.get("description") or None,
            status="pending",
            points=0,
            verified_by=None,
            created_at=datetime.utcnow(),
        )
        with self._data_lock:
            self._reports[report.id] = report
        return report

    def get_report(self, report_id: str) -> Optional[ReportRecord]:
        with self._data_lock:
            return self._reports.get(report_id)

    def list_reports_by_user(self, user_id: str) -> list[ReportRecord]:
        return [r for r in self._report_snapshot() if r.user_id == user_id]

    def list_reports_by_zone(self, zone: str) -> list[ReportRecord]:
        with self._data_lock:
            reports = list(self._reports.values())
            zones = {user.id: user.zone for user in self._users.values()}
        return [r for r in reports if r.user_id in zones and zones[r.user_id] == zone]

    def list_all_reports(self) -> list[ReportRecord]:
        return self._report_snapshot()

    def set_report_status(
        self, report_id: str, status: str, verified_by: Optional[str] = None
    ) -> Optional[ReportRecord]:
        report = self.get_report(report_id)
        if report is None:
            return None

        updated = replace(report, status=status, verified_by=verified_by or None)
        if status == "verified":
            points = points_for_category(report.category)
            self.update_user_points(report.user_id, points)
            updated = replace(updated, points=points)

        with self._data_lock:
            self._reports[report_id] = updated
        return updated

    # Rewards

    def list_rewards(self) -> list[RewardRecord]:
        return list(self._rewards.values())

    def get_reward(self, reward_id: str) -> Optional[RewardRecord]:
        return self._rewards.get(reward_id)

    def redeem_reward(self, user_id: str, reward_id: str) -> bool:
        reward = self._rewards.get(reward_id)
        if reward is None or self.get_user(user_id) is None:
            return False

        with self._lock_for(user_id):
            user = self.get_user(user_id)
            if user is None or user.green_points < reward.cost:
                return False
            self._apply_points(user_id, -reward.cost)
        return True
