from __future__ import annotations

import logging
import secrets
from datetime import datetime, timedelta
from typing import Any, Callable, Optional

from flask import Flask, Request, Response, session
from flask.sessions import SessionInterface, SessionMixin
from werkzeug.datastructures import CallbackDict

from ..common.datetime_utils import utc_now
from .repository import SessionStore

logger = logging.getLogger(__name__)


class ServerSession(CallbackDict, SessionMixin):
    """Session whose contents live in a SessionStore; the cookie only carries ``sid``."""

    def __init__(self, initial: Optional[dict[str, Any]] = None, *, sid: str, new: bool = False):
        def on_update(self):
            self.modified = True

        CallbackDict.__init__(self, initial, on_update)
        self.sid = sid
        self.new = new
        self.modified = False
        self.destroyed = False
        # sid replaced at login; its record is removed on save
        self.retired_sid: Optional[str] = None


class ServerSessionInterface(SessionInterface):
    """Rolling server-side sessions.

    Every response for a non-empty session pushes ``expires_at`` forward by
    ``lifetime`` and re-sends the cookie. Empty new sessions never reach the store.
    """

    def __init__(
        self,
        store: SessionStore,
        *,
        lifetime: timedelta,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.lifetime = lifetime
        self.clock = clock

    @staticmethod
    def _new_sid() -> str:
        return secrets.token_urlsafe(32)

    def open_session(self, app: Flask, request: Request) -> ServerSession:
        sid = request.cookies.get(self.get_cookie_name(app))
        if not sid:
            return ServerSession(sid=self._new_sid(), new=True)

        record = self.store.get(sid)
        if record is None or record.is_expired(self.clock()):
            # Unknown ids are never adopted, a fresh one is issued on save.
            return ServerSession(sid=self._new_sid(), new=True)
        return ServerSession(record.data, sid=sid)

    def save_session(self, app: Flask, session: ServerSession, response: Response) -> None:
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)

        if session.retired_sid:
            self.store.destroy(session.retired_sid)
            session.retired_sid = None

        if session.destroyed:
            response.delete_cookie(name, domain=domain, path=path)
            return

        if not session:
            if session.modified and not session.new:
                self.store.destroy(session.sid)
                response.delete_cookie(name, domain=domain, path=path)
            return

        expires_at = self.clock() + self.lifetime
        self.store.save(session_id=session.sid, data=dict(session), expires_at=expires_at)
        response.set_cookie(
            name,
            session.sid,
            max_age=int(self.lifetime.total_seconds()),
            httponly=self.get_cookie_httponly(app),
            domain=domain,
            path=path,
            secure=self.get_cookie_secure(app),
            samesite=self.get_cookie_samesite(app),
        )


def establish(**identity: Any) -> None:
    """Replace the current session contents with a single identity reference.

    The session always gets a fresh sid, so an id handed out before login is
    never promoted to an authenticated one.
    """
    if not session.new:
        session.retired_sid = session.sid
    session.sid = ServerSessionInterface._new_sid()
    session.new = True
    session.clear()
    session.update(identity)


def destroy_current(store: SessionStore) -> None:
    """Logout: delete the record first so a store failure surfaces as an error."""
    sid = getattr(session, "sid", None)
    if sid and not getattr(session, "new", True):
        store.destroy(sid)
    session.clear()
    session.destroyed = True
    logger.info("Session destroyed")
