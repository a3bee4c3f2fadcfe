"""Durable storage backed by Flask-SQLAlchemy."""

from __future__ import annotations

from typing import Iterable, Mapping, Optional

from sqlalchemy.exc import IntegrityError

from models import db
from models.report import Report
from models.reward import Reward
from models.user import User

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


class SqlStorage(AbstractStorage):
    """Store entities in the configured SQL database.

    Must be used inside an application context. Balance updates lock the
    user's row for the rest of the transaction.
    """

    def ensure_seeded(self, rewards: Iterable[Mapping[str, object]] | None = None) -> None:
        """Insert the reward catalog if the table is empty."""

        if db.session.query(Reward.id).first() is not None:
            return
        for entry in DEFAULT_REWARDS if rewards is None else rewards:
            reward = Reward(
                name=entry["name"],
                description=entry.get("description") or "",
                cost=int(entry["cost"]),
                category=entry.get("category") or "",
            )
            if entry.get("id"):
                reward.id = str(entry["id"])
            db.session.add(reward)
        db.session.commit()

    def _locked_user(self, user_id: str) -> Optional[User]:
        return (
            db.session.query(User)
            .filter(User.id == user_id)
            .with_for_update()
            .first()
        )

    # Users

    def create_user(self, data: Mapping[str, object]) -> UserRecord:
        email = str(data["email"])
        if User.query.filter_by(email=email).first() is not None:
            raise DuplicateEmailError(email)

        role = str(data["role"])
        user = User(
            email=email,
            name=data["name"],
            role=role,
            address=data.get("address") or None,
            zone=data.get("zone") or None,
            green_points=starting_points(role),
        )
        user.set_password(str(data["password"]))
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            raise DuplicateEmailError(email) from exc
        return user.to_record()

    def get_user(self, user_id: str) -> Optional[UserRecord]:
        user = db.session.get(User, user_id)
        return user.to_record() if user else None

    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        user = User.query.filter_by(email=email).first()
        return user.to_record() if user else None

    def update_user_points(self, user_id: str, delta: int) -> Optional[UserRecord]:
        user = self._locked_user(user_id)
        if user is None:
            db.session.rollback()
            return None
        user.green_points = (user.green_points or 0) + delta
        db.session.commit()
        return user.to_record()

    # Reports

    def create_report(self, data: Mapping[str, object]) -> ReportRecord:
        report = Report(
            user_id=data["user_id"],
            category=data["category"],
            location=data["location"],
            description=data.get("description") or None,
            status="pending",
            points=0,
            verified_by=None,
        )
        db.session.add(report)
        db.session.commit()
        return report.to_record()

    def get_report(self, report_id: str) -> Optional[ReportRecord]:
        report = db.session.get(Report, report_id)
        return report.to_record() if report else None

    def list_reports_by_user(self, user_id: str) -> list[ReportRecord]:
        reports = Report.query.filter_by(user_id=user_id).all()
        return [report.to_record() for report in reports]

    def list_reports_by_zone(self, zone: str) -> list[ReportRecord]:
        reports = (
            Report.query.join(User, Report.user_id == User.id)
            .filter(User.zone == zone)
            .all()
        )
        return [report.to_record() for report in reports]

    def list_all_reports(self) -> list[ReportRecord]:
        return [report.to_record() for report in Report.query.all()]

    def set_report_status(
        self, report_id: str, status: str, verified_by: Optional[str] = None
    ) -> Optional[ReportRecord]:
        report = db.session.get(Report, report_id)
        if report is None:
            return None

        report.status = status
        report.verified_by = verified_by or None
        if status == "verified":
            points = points_for_category(report.category)
            owner = self._locked_user(report.user_id)
            if owner is not None:
                owner.green_points = (owner.green_points or 0) + points
            report.points = points

        db.session.commit()
        return report.to_record()

    # Rewards

    def list_rewards(self) -> list[RewardRecord]:
        return [reward.to_record() for reward in Reward.query.all()]

    def get_reward(self, reward_id: str) -> Optional[RewardRecord]:
        reward = db.session.get(Reward, reward_id)
        return reward.to_record() if reward else None

    def redeem_reward(self, user_id: str, reward_id: str) -> bool:
        reward = db.session.get(Reward, reward_id)
        if reward is None:
            return False

        user = self._locked_user(user_id)
        if user is None or (user.green_points or 0) < reward.cost:
            db.session.rollback()
            return False

        user.green_points = (user.green_points or 0) - reward.cost
        db.session.commit()
        return True
