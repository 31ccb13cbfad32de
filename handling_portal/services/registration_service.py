import logging

from sqlalchemy.orm import Session

from handling_portal.core.config import settings
from handling_portal.models.agent_user import AgentUser
from handling_portal.models.user import User
from handling_portal.schemas.auth import AgentRegistration
from handling_portal.services.backend_client import BackendClient, UploadedDocument, store_public_document

log = logging.getLogger(__name__)

AGENT_ROLE = "Agent"
DOCUMENT_KINDS = ("ktp", "nib")


class RegistrationError(ValueError):
    pass


def register_agent(db: Session, client: BackendClient, form: AgentRegistration,
                   documents: dict[str, UploadedDocument] | None = None) -> User:
    email = form.email.strip().lower()
    if db.query(User).filter(User.email == email).first():
        raise RegistrationError("Email sudah terdaftar")
    documents = {k: v for k, v in (documents or {}).items() if v is not None}
    unknown = set(documents) - set(DOCUMENT_KINDS)
    if unknown:
        raise RegistrationError(f"unknown document kind: {', '.join(sorted(unknown))}")

    created = client.sign_up(
        email=email,
        password=form.password,
        metadata={
            "full_name": form.fullName,
            "company_name": form.companyName,
            "phone_number": form.phoneNumber,
            "role": AGENT_ROLE,
        },
    )
    auth_user = created.get("user") or created
    user_id = auth_user.get("id")
    if not user_id:
        raise RegistrationError("registration did not return a user id")

    urls: dict[str, str] = {}
    for kind, doc in documents.items():
        try:
            urls[kind] = store_public_document(client, settings.KYC_BUCKET, f"{user_id}/{kind}", doc)
        except ValueError as e:
            raise RegistrationError(str(e))

    user = User(
        id=user_id,
        email=email,
        full_name=form.fullName,
        company_name=form.companyName,
        phone_number=form.phoneNumber,
        role=AGENT_ROLE,
        status="pending",
        saldo=0,
    )
    db.add(user)
    db.add(AgentUser(
        id=user_id,
        email=email,
        full_name=form.fullName,
        company_name=form.companyName,
        phone_number=form.phoneNumber,
        status="pending",
        ktp_url=urls.get("ktp"),
        nib_url=urls.get("nib"),
    ))
    db.commit()
    db.refresh(user)
    log.info("agent registered", extra={"user_id": user_id, "documents": sorted(urls)})
    return user
