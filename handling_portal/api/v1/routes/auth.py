from typing import Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from handling_portal.db.session import get_db
from handling_portal.api.deps import bearer, get_current_user
from handling_portal.core.config import settings
from handling_portal.models.user import User
from handling_portal.schemas.auth import (
    AgentRegistration, ForgotPasswordRequest, SignInRequest, TokenPair, UpdatePasswordRequest,
)
from handling_portal.services.auth_service import AccessDeniedError, request_password_reset, sign_in, update_password
from handling_portal.services.backend_client import BackendClient, BackendError, UploadedDocument, get_backend_client
from handling_portal.services.registration_service import RegistrationError, register_agent

router = APIRouter(tags=["auth"])


def _backend_http_error(e: BackendError) -> HTTPException:
    if e.status_code in (400, 401, 403, 422):
        return HTTPException(status_code=400 if e.status_code == 422 else e.status_code, detail=e.message)
    return HTTPException(status_code=502, detail=e.message)


async def _document(upload: UploadFile | None) -> UploadedDocument | None:
    if upload is None or not upload.filename:
        return None
    return UploadedDocument(filename=upload.filename, content=await upload.read(),
                            content_type=upload.content_type or "application/octet-stream")


@router.post("/auth/register")
async def register(
    companyName: str = Form(...),
    fullName: str = Form(...),
    email: str = Form(...),
    phoneNumber: str = Form(...),
    password: str = Form(...),
    termsAccepted: bool = Form(False),
    ktp: Optional[UploadFile] = File(None),
    nib: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    client: BackendClient = Depends(get_backend_client),
):
    try:
        form = AgentRegistration(companyName=companyName, fullName=fullName, email=email,
                                 phoneNumber=phoneNumber, password=password, termsAccepted=termsAccepted)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    documents = {"ktp": await _document(ktp), "nib": await _document(nib)}
    try:
        user = register_agent(db, client, form, documents)
    except RegistrationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BackendError as e:
        raise _backend_http_error(e)
    return {"ok": True, "id": user.id, "email": user.email, "status": user.status}


@router.post("/auth/signin", response_model=TokenPair)
def signin(body: SignInRequest, db: Session = Depends(get_db), client: BackendClient = Depends(get_backend_client)):
    try:
        tokens = sign_in(db, client, body.email, body.password)
    except AccessDeniedError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except BackendError as e:
        raise _backend_http_error(e)
    return TokenPair(**tokens)


@router.post("/auth/signout")
def signout(creds=Depends(bearer), client: BackendClient = Depends(get_backend_client)):
    if not creds:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        client.sign_out(creds.credentials)
    except BackendError as e:
        raise _backend_http_error(e)
    return {"ok": True}


@router.post("/auth/forgot-password")
def forgot_password(body: ForgotPasswordRequest, client: BackendClient = Depends(get_backend_client)):
    try:
        request_password_reset(client, body.email, settings.PASSWORD_RESET_REDIRECT_URL)
    except BackendError as e:
        raise _backend_http_error(e)
    return {"ok": True}


@router.post("/auth/update-password")
def change_password(body: UpdatePasswordRequest, client: BackendClient = Depends(get_backend_client)):
    try:
        update_password(client, body.accessToken, body.password)
    except BackendError as e:
        raise _backend_http_error(e)
    return {"ok": True}


@router.get("/auth/me")
def me(me: User = Depends(get_current_user)):
    """Return current user info including role."""
    return {
        "id": me.id,
        "email": me.email,
        "fullName": me.full_name or "",
        "companyName": me.company_name or "",
        "role": me.role,
        "status": me.status,
    }
