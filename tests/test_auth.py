import re

import pytest
import requests
import responses
from pydantic import ValidationError

from handling_portal.models.agent_user import AgentUser
from handling_portal.models.user import User
from handling_portal.schemas.auth import AgentRegistration, ForgotPasswordRequest, SignInRequest
from conftest import BACKEND_URL, auth, make_user, token_for

TOKEN_URL = f"{BACKEND_URL}/auth/v1/token"
LOGOUT_URL = f"{BACKEND_URL}/auth/v1/logout"


def token_payload(user_id: str, role: str | None = None) -> dict:
    meta = {"role": role} if role else {}
    return {"access_token": "access-1", "refresh_token": "refresh-1",
            "user": {"id": user_id, "user_metadata": meta}}


@responses.activate
def test_agent_signs_in(client, db):
    agent = make_user(db, email="agent@umrohberkah.co.id")
    responses.add(responses.POST, TOKEN_URL, json=token_payload(agent.id))
    r = client.post("/api/v1/auth/signin", json={"email": "Agent@UmrohBerkah.co.id", "password": "rahasia1"})
    assert r.status_code == 200, r.text
    assert r.json()["access_token"] == "access-1"
    assert r.json()["role"] == "Agent"
    assert b'"email": "agent@umrohberkah.co.id"' in responses.calls[0].request.body


@responses.activate
def test_customer_role_is_refused_and_signed_out(client, db):
    responses.add(responses.POST, TOKEN_URL, json=token_payload("u-1", role="Customer"))
    responses.add(responses.POST, LOGOUT_URL, status=204)
    r = client.post("/api/v1/auth/signin", json={"email": "c@x.co", "password": "rahasia1"})
    assert r.status_code == 403
    assert "Your role: Customer" in r.json()["detail"]
    assert responses.calls[1].request.url == LOGOUT_URL


@responses.activate
def test_suspended_agent_is_refused(client, db):
    agent = make_user(db, status="suspended")
    responses.add(responses.POST, TOKEN_URL, json=token_payload(agent.id, role="Agent"))
    responses.add(responses.POST, LOGOUT_URL, status=500, json={"msg": "down"})
    r = client.post("/api/v1/auth/signin", json={"email": agent.email, "password": "rahasia1"})
    assert r.status_code == 403
    assert "tidak aktif" in r.json()["detail"]


@responses.activate
def test_wrong_password_shows_backend_message(client):
    responses.add(responses.POST, TOKEN_URL, status=400,
                  json={"error": "invalid_grant", "error_description": "Invalid login credentials"})
    r = client.post("/api/v1/auth/signin", json={"email": "a@b.co", "password": "salah123"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Invalid login credentials"


@responses.activate
def test_backend_unreachable(client):
    responses.add(responses.POST, TOKEN_URL, body=requests.ConnectionError("refused"))
    r = client.post("/api/v1/auth/signin", json={"email": "a@b.co", "password": "rahasia1"})
    assert r.status_code == 502


@responses.activate
def test_forgot_password(client):
    responses.add(responses.POST, f"{BACKEND_URL}/auth/v1/recover", json={})
    r = client.post("/api/v1/auth/forgot-password", json={"email": "agent@umrohberkah.co.id"})
    assert r.status_code == 200
    assert "redirect_to=" in responses.calls[0].request.url


def test_update_password_must_match(client):
    r = client.post("/api/v1/auth/update-password",
                    json={"accessToken": "t", "password": "rahasia1", "confirmPassword": "rahasia2"})
    assert r.status_code == 422


@responses.activate
def test_update_password(client):
    responses.add(responses.PUT, f"{BACKEND_URL}/auth/v1/user", json={"id": "u-1"})
    r = client.post("/api/v1/auth/update-password",
                    json={"accessToken": "recovery-token", "password": "rahasia1", "confirmPassword": "rahasia1"})
    assert r.status_code == 200
    assert responses.calls[0].request.headers["Authorization"] == "Bearer recovery-token"


def test_me(client, db):
    agent = make_user(db)
    body = client.get("/api/v1/auth/me", headers=auth(agent)).json()
    assert body["id"] == agent.id and body["role"] == "Agent"


def test_token_for_wrong_audience_is_rejected(client, db):
    agent = make_user(db)
    bad = token_for(agent, aud="somebody-else")
    assert client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {bad}"}).status_code == 401


@responses.activate
def test_register_agent_with_documents(client, db):
    responses.add(responses.POST, f"{BACKEND_URL}/auth/v1/signup", json={"user": {"id": "new-agent-id"}})
    responses.add(responses.POST, re.compile(rf"{BACKEND_URL}/storage/v1/object/agent-documents/.*"), json={})
    r = client.post(
        "/api/v1/auth/register",
        data={"companyName": "PT Umroh Berkah", "fullName": "Budi Santoso", "email": "Budi@UmrohBerkah.co.id",
              "phoneNumber": "081234567890", "password": "rahasia1", "termsAccepted": "true"},
        files={"ktp": ("ktp.png", b"png-bytes", "image/png"), "nib": ("nib.pdf", b"pdf-bytes", "application/pdf")},
    )
    assert r.status_code == 200, r.text
    assert r.json()["status"] == "pending"

    u = db.get(User, "new-agent-id")
    assert u.email == "budi@umrohberkah.co.id" and u.saldo == 0 and u.role == "Agent"
    a = db.get(AgentUser, "new-agent-id")
    assert a.ktp_url.endswith("/agent-documents/new-agent-id/ktp.png")
    assert a.nib_url.endswith("/agent-documents/new-agent-id/nib.pdf")


def test_register_requires_terms(client):
    r = client.post(
        "/api/v1/auth/register",
        data={"companyName": "PT Umroh Berkah", "fullName": "Budi Santoso", "email": "budi@umrohberkah.co.id",
              "phoneNumber": "081234567890", "password": "rahasia1"},
    )
    assert r.status_code == 422


def test_register_duplicate_email(client, db):
    make_user(db, email="budi@umrohberkah.co.id")
    r = client.post(
        "/api/v1/auth/register",
        data={"companyName": "PT Umroh Berkah", "fullName": "Budi Santoso", "email": "budi@umrohberkah.co.id",
              "phoneNumber": "081234567890", "password": "rahasia1", "termsAccepted": "true"},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "Email sudah terdaftar"


@pytest.mark.parametrize("email", ["budi santoso@x.co", "budi@x..co", "budi@@x.co"])
def test_auth_forms_reject_malformed_email(email):
    with pytest.raises(ValidationError):
        SignInRequest(email=email, password="rahasia1")
    with pytest.raises(ValidationError):
        ForgotPasswordRequest(email=email)
    with pytest.raises(ValidationError):
        AgentRegistration(companyName="PT Umroh Berkah", fullName="Budi Santoso", email=email,
                          phoneNumber="081234567890", password="rahasia1", termsAccepted=True)
