from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session
from handling_portal.db.session import get_db
from handling_portal.core.security import decode_token
from handling_portal.models.user import User
from handling_portal.services.agent_session import AgentSession, build_session

bearer = HTTPBearer(auto_error=False)

def get_current_user(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> User:
    if not creds:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        payload = decode_token(creds.credentials)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")
    user_id = payload.get("sub")
    user = db.get(User, user_id) if user_id else None
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    if user.status in ("suspended", "inactive"):
        raise HTTPException(status_code=403, detail="Account inactive")
    return user

def get_agent_session(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> AgentSession:
    return build_session(db, user, access_token=creds.credentials if creds else "")

def require_roles(*roles: str):
    wanted = {r.lower() for r in roles}
    def _guard(user: User = Depends(get_current_user)) -> User:
        if (user.role or "").lower() not in wanted:
            raise HTTPException(status_code=403, detail="Forbidden")
        return user
    return _guard
