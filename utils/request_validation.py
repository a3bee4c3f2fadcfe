"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Iterable

from email_validator import EmailNotValidError, validate_email
from flask import Request, current_app
from werkzeug.exceptions import BadRequest

from storage.records import REPORT_CATEGORIES, REPORT_STATUSES, USER_ROLES

INVALID_DATA = "invalid data"


def _reject(reason: str) -> BadRequest:
    current_app.logger.debug("Rejected request payload: %s", reason)
    return BadRequest(INVALID_DATA)


def parse_json_request(
    req: Request,
    *,
    required_keys: Iterable[str] | None = None,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error.

    Every failure surfaces to the caller as the same generic message; the
    specific reason is only logged.
    """

    if not req.is_json:
        raise _reject("content type is not application/json")

    data = req.get_json(silent=True)
    if data is None:
        raise _reject("body is missing or not valid JSON")

    if not isinstance(data, dict):
        raise _reject("JSON payload is not an object")

    if not data and not allow_empty:
        raise _reject("JSON body is empty")

    if required_keys:
        missing = [key for key in required_keys if not _present(data.get(key))]
        if missing:
            raise _reject("missing required fields: {}".format(", ".join(sorted(missing))))

    return data


def _present(value: object) -> bool:
    if isinstance(value, str):
        return bool(value.strip())
    return value is not None


def _optional_text(data: dict, key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise _reject(f"{key} must be a string")
    return value.strip() or None


def _required_text(data: dict, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        raise _reject(f"{key} must be a non-empty string")
    return value


def _choice(data: dict, key: str, allowed: Iterable[str]) -> str:
    value = data.get(key)
    if value not in allowed:
        raise _reject(f"{key} must be one of: {', '.join(allowed)}")
    return value


def _email(data: dict) -> str:
    email = _required_text(data, "email").strip()
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as exc:
        raise _reject(f"email is malformed ({exc})") from exc
    return email


def registration_payload(req: Request) -> dict:
    """Validate a registration body and return the cleaned user data."""

    data = parse_json_request(req, required_keys=("email", "password", "name", "role"))
    return {
        "email": _email(data),
        "password": _required_text(data, "password"),
        "name": _required_text(data, "name").strip(),
        "role": _choice(data, "role", USER_ROLES),
        "address": _optional_text(data, "address"),
        "zone": _optional_text(data, "zone"),
    }


def login_payload(req: Request) -> tuple[str, str]:
    data = parse_json_request(req, required_keys=("email", "password"))
    return _email(data), _required_text(data, "password")


def report_payload(req: Request) -> dict:
    """Validate a new report body."""

    data = parse_json_request(req, required_keys=("user_id", "category", "location"))
    return {
        "user_id": _required_text(data, "user_id").strip(),
        "category": _choice(data, "category", REPORT_CATEGORIES),
        "location": _required_text(data, "location").strip(),
        "description": _optional_text(data, "description"),
    }


def status_update_payload(req: Request) -> tuple[str, str | None]:
    data = parse_json_request(req, required_keys=("status",))
    return _choice(data, "status", REPORT_STATUSES), _optional_text(data, "verified_by")


def redemption_payload(req: Request) -> tuple[str, str]:
    data = parse_json_request(req, required_keys=("user_id", "reward_id"))
    return (
        _required_text(data, "user_id").strip(),
        _required_text(data, "reward_id").strip(),
    )
