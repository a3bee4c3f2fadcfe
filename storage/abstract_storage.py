"""Storage abstraction layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping, Optional

from .records import ReportRecord, RewardRecord, UserRecord


class AbstractStorage(ABC):
    """Interface for storage backends.

    Backends own the user, report and reward collections. Every method returns
    detached records so callers can never mutate stored state directly.
    Lookups return ``None`` for missing entities instead of raising.
    """

    # Users

    @abstractmethod
    def create_user(self, data: Mapping[str, object]) -> UserRecord:
        """Persist a new user and return it.

        ``data`` carries ``email``, ``password``, ``name`` and ``role`` plus
        optional ``address`` and ``zone``. Raises ``DuplicateEmailError`` if
        the email is already registered.
        """

    @abstractmethod
    def get_user(self, user_id: str) -> Optional[UserRecord]:
        """Return the user with the given id."""

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[UserRecord]:
        """Return the user registered under the exact email."""

    @abstractmethod
    def update_user_points(self, user_id: str, delta: int) -> Optional[UserRecord]:
        """Add ``delta`` to a user's balance and return the updated user."""

    # Reports

    @abstractmethod
    def create_report(self, data: Mapping[str, object]) -> ReportRecord:
        """Persist a new pending report."""

    @abstractmethod
    def get_report(self, report_id: str) -> Optional[ReportRecord]:
        """Return the report with the given id."""

    @abstractmethod
    def list_reports_by_user(self, user_id: str) -> list[ReportRecord]:
        """Return every report filed by ``user_id``."""

    @abstractmethod
    def list_reports_by_zone(self, zone: str) -> list[ReportRecord]:
        """Return reports whose owner is assigned to exactly ``zone``."""

    @abstractmethod
    def list_all_reports(self) -> list[ReportRecord]:
        """Return a snapshot of every report."""

    @abstractmethod
    def set_report_status(
        self, report_id: str, status: str, verified_by: Optional[str] = None
    ) -> Optional[ReportRecord]:
        """Set a report's status and reviewer.

        The transition is applied even if the report was already reviewed.
        Moving to ``verified`` credits the category's points to the owner.
        """

    # Rewards

    @abstractmethod
    def list_rewards(self) -> list[RewardRecord]:
        """Return the reward catalog."""

    @abstractmethod
    def get_reward(self, reward_id: str) -> Optional[RewardRecord]:
        """Return a single catalog entry."""

    @abstractmethod
    def redeem_reward(self, user_id: str, reward_id: str) -> bool:
        """Debit a reward's cost from a user's balance.

        Returns ``False`` without touching the balance when the user or reward
        is missing or the balance does not cover the cost.
        """
