"""
Auth State Stream Module

A push-only channel of authentication transitions: each event carries the
signed-in Identity, or None after sign-out. Listeners may be plain callables
or coroutine functions; publish awaits them in subscription order.
"""
import inspect
from typing import Awaitable, Callable, List, Optional, Protocol, Union

from crm.schemas.session import Identity

AuthListener = Callable[[Optional[Identity]], Union[None, Awaitable[None]]]
Unsubscribe = Callable[[], None]


class AuthStateSource(Protocol):
    """Anything that can push auth-state transitions."""

    @property
    def current(self) -> Optional[Identity]: ...

    def subscribe(self, listener: AuthListener) -> Unsubscribe: ...


class AuthStateStream:
    def __init__(self) -> None:
        self._listeners: List[AuthListener] = []
        self._current: Optional[Identity] = None

    @property
    def current(self) -> Optional[Identity]:
        return self._current

    def subscribe(self, listener: AuthListener) -> Unsubscribe:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def publish(self, identity: Optional[Identity]) -> None:
        self._current = identity
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            result = listener(identity)
            if inspect.isawaitable(result):
                await result
