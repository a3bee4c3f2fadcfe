"""HTTP client driving the Green Points API."""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from .query_cache import QueryCache
from .session import SessionStore

logger = logging.getLogger(__name__)

TRAINING_BONUS = 5


class ApiError(Exception):
    """Raised for any non-2xx response."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class GreenPointsClient:
    """Talks to the REST API and keeps the session store and cache current.

    ``session`` defaults to a ``requests.Session``; anything exposing the same
    ``request(method, url, json=..., headers=...)`` call can be supplied.
    """

    def __init__(
        self,
        base_url: str,
        *,
        store: Optional[SessionStore] = None,
        cache: Optional[QueryCache] = None,
        session: Any = None,
        timeout: Optional[float] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.store = store or SessionStore()
        self.cache = cache or QueryCache()
        self._session = session or requests.Session()
        self._timeout = timeout
        self._access_token: Optional[str] = None

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        headers = {}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"

        kwargs: dict[str, Any] = {"json": payload, "headers": headers}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        response = self._session.request(method, self._url(path), **kwargs)
        if not response.ok:
            raise ApiError(response.status_code, _error_message(response))
        return response.json()

    @property
    def current_user(self) -> Optional[dict]:
        return self.store.user

    # Auth

    def register(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: str = "citizen",
        address: Optional[str] = None,
        zone: Optional[str] = None,
    ) -> dict:
        """Create an account and sign in as it."""

        payload = {
            "email": email,
            "password": password,
            "name": name,
            "role": role,
            "address": address,
            "zone": zone,
        }
        body = self._request("POST", "/auth/register", payload)
        self._access_token = body.get("access_token")
        self.store.sign_in(body["user"])
        return body["user"]

    def login(self, email: str, password: str) -> dict:
        body = self._request("POST", "/auth/login", {"email": email, "password": password})
        self._access_token = body.get("access_token")
        self.store.sign_in(body["user"])
        return body["user"]

    def logout(self) -> None:
        self._access_token = None
        self.cache.clear()
        self.store.logout()

    def refresh_user(self) -> dict:
        """Replace the optimistic session user with the server's copy."""

        user = self._request("GET", "/auth/me")
        self.store.set_state(user=user)
        return user

    def get_user(self, user_id: str) -> dict:
        return self._request("GET", f"/users/{user_id}")

    # Reports

    def submit_report(
        self, category: str, location: str, description: Optional[str] = None
    ) -> dict:
        user = self._require_user()
        report = self._request(
            "POST",
            "/reports",
            {
                "user_id": user["id"],
                "category": category,
                "location": location,
                "description": description,
            },
        )
        self.cache.invalidate(("reports",))
        return report

    def reports_for_user(self, user_id: Optional[str] = None) -> list[dict]:
        user_id = user_id or self._require_user()["id"]
        return self.cache.fetch(
            ("reports", "user", user_id),
            lambda: self._request("GET", f"/reports/user/{user_id}"),
        )

    def reports_for_zone(self, zone: Optional[str] = None) -> list[dict]:
        zone = zone or self._require_user().get("zone")
        if not zone:
            return []
        return self.cache.fetch(
            ("reports", "zone", zone),
            lambda: self._request("GET", f"/reports/zone/{quote(zone)}"),
        )

    def all_reports(self) -> list[dict]:
        return self.cache.fetch(
            ("reports", "all"), lambda: self._request("GET", "/reports")
        )

    def verify_report(self, report_id: str, status: str = "verified") -> dict:
        """Review a report as the signed-in verifier."""

        reviewer = self._require_user()
        report = self._request(
            "PATCH",
            f"/reports/{report_id}/verify",
            {"status": status, "verified_by": reviewer["id"]},
        )
        self.cache.invalidate(("reports",))
        return report

    # Rewards

    def rewards(self) -> list[dict]:
        return self.cache.fetch(("rewards",), lambda: self._request("GET", "/rewards"))

    def redeem(self, reward: dict) -> bool:
        """Redeem ``reward`` and debit the session balance locally."""

        user = self._require_user()
        self._request(
            "POST", "/rewards/redeem", {"user_id": user["id"], "reward_id": reward["id"]}
        )
        self.store.adjust_points(-int(reward["cost"]))
        logger.info("Redeemed %s for %s points", reward.get("name"), reward["cost"])
        return True

    def start_training(self) -> dict:
        """Credit the local training bonus; the server is not told."""

        self._require_user()
        return self.store.adjust_points(TRAINING_BONUS).user

    def _require_user(self) -> dict:
        user = self.store.user
        if user is None:
            raise ApiError(401, "Not signed in")
        return user


def _error_message(response: Any) -> str:
    try:
        body = response.json()
    except ValueError:
        return getattr(response, "text", "") or "Request failed"
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("msg") or body)
    return str(body)
