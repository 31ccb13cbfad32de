import logging

from sqlalchemy.orm import Session

from handling_portal.models.agent_user import AgentUser
from handling_portal.models.user import User
from handling_portal.services.backend_client import BackendClient, BackendError

log = logging.getLogger(__name__)

ALLOWED_ROLES = ("Admin", "Agent")
INACTIVE_MESSAGE = "Akun Anda tidak aktif atau ditangguhkan. Silakan hubungi administrator."


class AccessDeniedError(PermissionError):
    pass


def _role_for(db: Session, auth_user: dict) -> str | None:
    role = (auth_user.get("user_metadata") or {}).get("role")
    if role:
        return role
    u = db.get(User, auth_user.get("id"))
    return u.role if u else None


def _is_blocked(db: Session, user_id: str) -> bool:
    u = db.get(User, user_id)
    a = db.get(AgentUser, user_id)
    if u and u.status in ("suspended", "inactive"):
        return True
    return bool(a and a.status == "suspended")


def sign_in(db: Session, client: BackendClient, email: str, password: str) -> dict:
    """Authenticate with the identity backend, then gate on role and account status.

    Returns the backend's token payload plus the resolved role.
    """
    tokens = client.sign_in_with_password(email=email.strip().lower(), password=password)
    auth_user = tokens.get("user") or {}
    access_token = tokens.get("access_token", "")

    role = _role_for(db, auth_user)
    if role not in ALLOWED_ROLES:
        _sign_out_quietly(client, access_token)
        raise AccessDeniedError(
            f"Access denied. Only Admin and Agent roles are allowed to sign in. Your role: {role or 'Unknown'}"
        )
    if _is_blocked(db, auth_user.get("id")):
        _sign_out_quietly(client, access_token)
        raise AccessDeniedError(INACTIVE_MESSAGE)

    log.info("signed in", extra={"user_id": auth_user.get("id"), "role": role})
    return {"access_token": access_token, "refresh_token": tokens.get("refresh_token", ""), "role": role}


def _sign_out_quietly(client: BackendClient, access_token: str) -> None:
    # the refusal is what the caller needs to see; a failed revoke only gets logged
    try:
        client.sign_out(access_token)
    except BackendError as e:
        log.warning("sign out after refused sign in failed", extra={"error": e.message})


def request_password_reset(client: BackendClient, email: str, redirect_to: str) -> None:
    client.reset_password_for_email(email.strip().lower(), redirect_to)


def update_password(client: BackendClient, access_token: str, password: str) -> None:
    client.update_user_password(access_token, password)
