"""
Session Bootstrap Module

Listens to an auth-state source, resolves the role for every signed-in
identity, and republishes the result as a SessionState to read-only
subscribers.

States:
    loading          - initial state, and while a role lookup is in flight
    authenticated    - user set, loading False
    unauthenticated  - user None, loading False

Transitions are driven only by events pushed from the source. A failed role
lookup never propagates: the identity is published with the default role
and the error is logged.
"""
import inspect
import logging
from typing import Awaitable, Callable, List, Optional, Union

from fastapi.concurrency import run_in_threadpool

from crm.auth.state import AuthStateSource, Unsubscribe
from crm.schemas.session import DEFAULT_ROLE, Identity, Role, SessionState, SessionUser

logger = logging.getLogger(__name__)

RoleFetcher = Callable[[str], Union[Role, Awaitable[Role]]]
SessionListener = Callable[[SessionState], None]


class SessionBootstrap:
    """
    Coordinates identity -> role -> published session.

    `fetch_role` may be a coroutine function or a blocking callable; blocking
    callables run in the threadpool so the event loop is never held up.
    """

    def __init__(
        self,
        source: AuthStateSource,
        fetch_role: RoleFetcher,
        default_role: Role = DEFAULT_ROLE,
    ):
        self.source = source
        self.fetch_role = fetch_role
        self.default_role = default_role
        self._state = SessionState(user=None, loading=True)
        self._listeners: List[SessionListener] = []
        self._unsubscribe: Optional[Unsubscribe] = None
        # Bumped on every auth event; a lookup finishing under an older value is stale
        self._generation = 0

    @property
    def current(self) -> SessionState:
        return self._state

    def subscribe(self, listener: SessionListener) -> Unsubscribe:
        """Register a listener. It is called at once with the current session, then on every change."""
        self._listeners.append(listener)
        self._notify(listener, self._state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def start(self) -> None:
        if self._unsubscribe is not None:
            return
        self._unsubscribe = self.source.subscribe(self.handle_auth_state)
        # Settle the initial state from whatever the source already knows
        await self.handle_auth_state(self.source.current)

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def handle_auth_state(self, identity: Optional[Identity]) -> None:
        self._generation += 1
        generation = self._generation

        if identity is None:
            self._publish(SessionState(user=None, loading=False))
            return

        self._publish(SessionState(user=None, loading=True))
        role = await self._resolve_role(identity)

        if generation != self._generation:
            logger.debug("Dropping stale role lookup for %s", identity.uid)
            return
        self._publish(SessionState(user=SessionUser.from_identity(identity, role), loading=False))

    async def _resolve_role(self, identity: Identity) -> Role:
        try:
            if inspect.iscoroutinefunction(self.fetch_role):
                role = await self.fetch_role(identity.uid)
            else:
                role = await run_in_threadpool(self.fetch_role, identity.uid)
                if inspect.isawaitable(role):
                    role = await role
            return Role.coerce(role)
        except Exception as exc:
            logger.error("Error fetching profile for %s: %s", identity.uid, exc)
            return self.default_role

    def _publish(self, state: SessionState) -> None:
        self._state = state
        for listener in list(self._listeners):
            self._notify(listener, state)

    @staticmethod
    def _notify(listener: SessionListener, state: SessionState) -> None:
        try:
            listener(state)
        except Exception:
            logger.exception("Session listener %r failed", listener)
