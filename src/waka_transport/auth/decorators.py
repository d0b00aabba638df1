from __future__ import annotations

from functools import wraps

from flask import g, session

from .guard import AuthGuard, SessionSnapshot


def current_snapshot() -> SessionSnapshot:
    return SessionSnapshot(user_id=session.get("user_id"), staff_id=session.get("staff_id"))


def staff_required(guard: AuthGuard):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.staff = guard.require_staff(current_snapshot())
            return view(*args, **kwargs)

        return wrapper

    return decorator


def user_required(guard: AuthGuard):
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.user = guard.require_user(current_snapshot())
            return view(*args, **kwargs)

        return wrapper

    return decorator
