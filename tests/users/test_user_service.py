from __future__ import annotations

import re

import pytest
from werkzeug.security import check_password_hash

from waka_transport.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from waka_transport.users.tokens import ACTIVATION_SALT, RESET_SALT


def sign_up_payload(**overrides):
    payload = {
        "username": "aroha",
        "password": "kia-ora-123",
        "firstName": "Aroha",
        "lastName": "Ngata",
        "email": "aroha@example.com",
        "town": "Whakatane",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def service(container):
    return container.user_service


def mailed_token(message, page):
    match = re.search(rf"/{page}/\d+/([\w.\-]+)", message.html)
    assert match, message.html
    return match.group(1)


def test_sign_up_hashes_password_and_sends_activation_link(service, users, mailer, tokens):
    result = service.sign_up(sign_up_payload())

    stored = users.get_by_id(result.user.user_id)
    assert stored.password_hash != "kia-ora-123"
    assert check_password_hash(stored.password_hash, "kia-ora-123")
    assert stored.profile.town == "Whakatane"

    claims = tokens.verify(result.activation_token, purpose=ACTIVATION_SALT)
    assert (claims.user_id, claims.email) == (stored.user_id, "aroha@example.com")
    (message,) = mailer.sent
    assert message.subject == "Your Application has been approved"
    assert f"http://localhost:3000/resetpassword/{stored.user_id}/{result.activation_token}" in message.html


@pytest.mark.parametrize("missing", ["username", "password"])
def test_sign_up_requires_credentials(service, missing):
    with pytest.raises(ValidationError, match="Parameters missing"):
        service.sign_up(sign_up_payload(**{missing: ""}))


def test_duplicate_username_conflicts(service, mailer):
    service.sign_up(sign_up_payload())

    with pytest.raises(ConflictError):
        service.sign_up(sign_up_payload(email="other@example.com"))
    assert len(mailer.sent) == 1


def test_login_reports_which_credential_is_wrong(service):
    service.sign_up(sign_up_payload())

    with pytest.raises(AuthenticationError, match="Username is incorrect"):
        service.login(username="tama", password="kia-ora-123")
    with pytest.raises(AuthenticationError, match="Password is incorrect"):
        service.login(username="aroha", password="wrong")
    assert service.login(username="aroha", password="kia-ora-123").username == "aroha"


def test_forgot_password_mails_reset_link(service, mailer, tokens):
    user = service.sign_up(sign_up_payload()).user

    receipt = service.forgot_password(email="aroha@example.com")

    assert receipt.to == "aroha@example.com"
    message = mailer.sent[-1]
    assert message.subject == "Reset your password"
    claims = tokens.verify(mailed_token(message, "forgotpasswordpage"), purpose=RESET_SALT)
    assert (claims.user_id, claims.email) == (user.user_id, "aroha@example.com")


def test_forgot_password_for_unknown_email(service):
    with pytest.raises(NotFoundError, match="User not found"):
        service.forgot_password(email="nobody@example.com")


def test_change_password_with_mailed_reset_token(service, mailer):
    user = service.sign_up(sign_up_payload()).user
    service.forgot_password(email="aroha@example.com")
    token = mailed_token(mailer.sent[-1], "forgotpasswordpage")

    service.change_password(user_id=str(user.user_id), token=token, password="new-secret")

    assert service.login(username="aroha", password="new-secret").user_id == user.user_id


def test_change_password_accepts_activation_token(service):
    result = service.sign_up(sign_up_payload())

    service.change_password(user_id=result.user.user_id, token=result.activation_token, password="first-real-one")

    assert service.login(username="aroha", password="first-real-one")


def test_change_password_rejects_token_for_another_email(service, tokens):
    user = service.sign_up(sign_up_payload()).user
    foreign = tokens.issue(user_id=user.user_id, email="someone@example.com", purpose=RESET_SALT)

    with pytest.raises(AuthenticationError, match="Invalid token"):
        service.change_password(user_id=user.user_id, token=foreign, password="new-secret")


def test_activation_token_of_a_shared_email_cannot_reset_another_account(service):
    victim = service.sign_up(sign_up_payload()).user
    intruder = service.sign_up(sign_up_payload(username="intruder", password="x-123"))

    with pytest.raises(AuthenticationError, match="Invalid token"):
        service.change_password(user_id=victim.user_id, token=intruder.activation_token, password="owned")

    assert service.login(username="aroha", password="kia-ora-123")


def test_change_password_rejects_garbage_token(service):
    user = service.sign_up(sign_up_payload()).user

    with pytest.raises(AuthenticationError):
        service.change_password(user_id=user.user_id, token="not-a-token", password="new-secret")


def test_change_password_argument_checks(service):
    user = service.sign_up(sign_up_payload()).user

    with pytest.raises(ValidationError, match="Invalid user Id"):
        service.change_password(user_id="abc", token="t", password="x")
    with pytest.raises(NotFoundError):
        service.change_password(user_id=99, token="t", password="x")
    with pytest.raises(ValidationError, match="Parameters missing"):
        service.change_password(user_id=user.user_id, token="t", password="")


def test_user_endpoints(client):
    signed_up = client.post("/api/users/signup", json=sign_up_payload())
    assert signed_up.status_code == 201
    body = signed_up.get_json()
    assert body["user"]["username"] == "aroha"
    assert "passwordHash" not in body["user"] and "password_hash" not in body["user"]
    assert body["activationToken"]

    assert client.get("/api/users").status_code == 401
    login = client.post("/api/users/login", json={"username": "aroha", "password": "kia-ora-123"})
    assert login.status_code == 201
    assert client.get("/api/users").get_json()["email"] == "aroha@example.com"

    client.post("/api/users/logout")
    assert client.get("/api/users").status_code == 401


def test_wrong_password_over_http(client):
    client.post("/api/users/signup", json=sign_up_payload())

    resp = client.post("/api/users/login", json={"username": "aroha", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Password is incorrect"}


def test_forgot_password_response_does_not_carry_the_token(client, mailer):
    client.post("/api/users/signup", json=sign_up_payload())

    resp = client.post("/api/users/forgotpassword", json={"email": "aroha@example.com"})

    assert resp.status_code == 200
    token = mailed_token(mailer.sent[-1], "forgotpasswordpage")
    assert token not in resp.get_data(as_text=True)
    assert resp.get_json() == {"message": "250 OK"}


def test_reset_link_only_works_for_its_own_account(client, mailer):
    client.post("/api/users/signup", json=sign_up_payload())
    intruder = client.post("/api/users/signup", json=sign_up_payload(username="intruder", password="x-123"))
    victim_id = 1

    resp = client.patch(
        f"/api/users/changepassword/{victim_id}/{intruder.get_json()['activationToken']}", json={"password": "owned"}
    )

    assert resp.status_code == 401
    assert client.post("/api/users/login", json={"username": "aroha", "password": "owned"}).status_code == 401
