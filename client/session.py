"""Observable holder for the signed-in user."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Optional

Listener = Callable[["SessionState"], None]


class SessionDisposedError(RuntimeError):
    """Raised when subscribing to a store that has been disposed."""


@dataclass(frozen=True)
class SessionState:
    user: Optional[dict] = None
    is_authenticated: bool = False


ANONYMOUS = SessionState()


class SessionStore:
    """Holds one ``SessionState`` and notifies listeners on every change.

    Listeners run synchronously, in the order they subscribed, each time the
    state is replaced. Use the store as a context manager (or call
    ``dispose``) to tie its listeners to the lifetime of the owning app.
    """

    def __init__(self, initial: SessionState = ANONYMOUS):
        self._state = initial
        self._listeners: list[Listener] = []
        self._disposed = False

    def __enter__(self) -> "SessionStore":
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def user(self) -> Optional[dict]:
        return self._state.user

    @property
    def disposed(self) -> bool:
        return self._disposed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        if self._disposed:
            raise SessionDisposedError("Cannot subscribe to a disposed session store.")
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_state(self, **changes) -> SessionState:
        """Replace the state with a copy carrying ``changes`` and notify."""

        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def sign_in(self, user: dict) -> SessionState:
        return self.set_state(user=dict(user), is_authenticated=True)

    def logout(self) -> SessionState:
        return self.set_state(user=None, is_authenticated=False)

    def adjust_points(self, delta: int) -> SessionState:
        """Optimistically move the session user's balance by ``delta``.

        The server is not consulted, so the local balance may drift from the
        stored one until the user is refreshed.
        """

        user = self._state.user
        if user is None:
            return self._state
        patched = dict(user, green_points=(user.get("green_points") or 0) + delta)
        return self.set_state(user=patched)

    def dispose(self) -> None:
        self._listeners.clear()
        self._disposed = True
