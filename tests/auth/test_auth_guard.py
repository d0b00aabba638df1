from __future__ import annotations

import pytest
from flask import g, session

from waka_transport.auth.decorators import staff_required, user_required
from waka_transport.auth.guard import AuthenticatedStaff, AuthGuard, SessionSnapshot
from waka_transport.core.enums import Role
from waka_transport.core.exceptions import AuthenticationError, AuthorizationError


@pytest.fixture
def guard(staffs):
    return AuthGuard(staffs)


def test_missing_staff_id_is_unauthenticated_without_store_lookup(guard, staffs):
    staffs.add("dispatch@wakaeasternbay.org.nz")

    with pytest.raises(AuthenticationError) as exc:
        guard.require_staff(SessionSnapshot(user_id=7))

    assert str(exc.value) == "Staff not authenticated"
    assert exc.value.status_code == 401
    assert staffs.lookups == 0


@pytest.mark.parametrize("bad_id", ["abc", "", "-3", 0, True])
def test_malformed_staff_id_is_unauthenticated(guard, bad_id):
    with pytest.raises(AuthenticationError, match="Staff not authenticated"):
        guard.require_staff(SessionSnapshot(staff_id=bad_id))


def test_unknown_staff_id_is_unauthenticated(guard):
    with pytest.raises(AuthenticationError, match="Staff not authenticated"):
        guard.require_staff(SessionSnapshot(staff_id=99))


def test_non_staff_role_is_unauthorized_with_401(guard, staffs):
    imposter = staffs.add("driver@wakaeasternbay.org.nz", role=Role.USER)

    with pytest.raises(AuthorizationError) as exc:
        guard.require_staff(SessionSnapshot(staff_id=imposter.staff_id))

    assert str(exc.value) == "Staff not authenticated"
    assert exc.value.status_code == 401


def test_valid_staff_resolves_identity(guard, staffs):
    staff = staffs.add("dispatch@wakaeasternbay.org.nz")

    identity = guard.require_staff(SessionSnapshot(staff_id=str(staff.staff_id)))

    assert identity == AuthenticatedStaff(staff_id=staff.staff_id, email="dispatch@wakaeasternbay.org.nz")


def test_user_check_is_presence_only(guard):
    assert guard.require_user(SessionSnapshot(user_id=42)).user_id == 42

    with pytest.raises(AuthenticationError, match="User not authenticated"):
        guard.require_user(SessionSnapshot(staff_id=1))


def test_staff_decorator_invokes_view_exactly_once(app, guard, staffs):
    staff = staffs.add("dispatch@wakaeasternbay.org.nz")
    calls = []

    @staff_required(guard)
    def view():
        calls.append(1)
        return "ok"

    with app.test_request_context("/api/rosters"):
        session["staff_id"] = staff.staff_id
        assert view() == "ok"

    assert calls == [1]


def test_staff_decorator_does_not_invoke_view_for_empty_session(app, guard):
    calls = []

    @staff_required(guard)
    def view():
        calls.append(1)

    with app.test_request_context("/api/rosters"):
        with pytest.raises(AuthenticationError):
            view()

    assert calls == []


def test_user_decorator_exposes_identity_on_g(app, guard):
    @user_required(guard)
    def view():
        return g.user.user_id

    with app.test_request_context("/api/bookings"):
        session["user_id"] = 5
        assert view() == 5
