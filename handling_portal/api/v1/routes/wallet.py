from typing import Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from pydantic import ValidationError
from sqlalchemy.orm import Session

from handling_portal.db.session import get_db
from handling_portal.api.deps import get_agent_session
from handling_portal.models.topup_request import TopUpRequest
from handling_portal.schemas.wallet import LedgerEntryOut, TopUpForm, TopUpOut
from handling_portal.services.agent_session import AgentSession
from handling_portal.services.backend_client import BackendClient, BackendError, UploadedDocument, get_backend_client
from handling_portal.services.wallet_service import TopUpValidationError, request_topup, transaction_history

router = APIRouter(tags=["wallet"])


def _topup_out(r: TopUpRequest) -> TopUpOut:
    return TopUpOut(
        referenceNo=r.reference_no,
        amount=int(r.amount or 0),
        status=r.status,
        paymentMethod=r.payment_method or "",
        bankName=r.bank_name or "",
        destinationAccount=r.destination_account or "",
        accountHolder=r.account_holder_received,
        proofUrl=r.proof_url or "",
        createdAt=r.created_at.isoformat() if r.created_at else None,
    )


@router.get("/wallet")
def balance(session: AgentSession = Depends(get_agent_session)):
    return {"userId": session.user_id, "saldo": session.saldo}


@router.get("/wallet/history", response_model=list[LedgerEntryOut])
def history(db: Session = Depends(get_db), session: AgentSession = Depends(get_agent_session)):
    return [LedgerEntryOut(**row) for row in transaction_history(db, session.user_id)]


@router.get("/wallet/topups", response_model=list[TopUpOut])
def list_topups(db: Session = Depends(get_db), session: AgentSession = Depends(get_agent_session)):
    items = (
        db.query(TopUpRequest)
        .filter(TopUpRequest.user_id == session.user_id)
        .order_by(TopUpRequest.created_at.desc())
        .all()
    )
    return [_topup_out(r) for r in items]


@router.get("/wallet/topups/{reference_no}", response_model=TopUpOut)
def get_topup(reference_no: str, db: Session = Depends(get_db), session: AgentSession = Depends(get_agent_session)):
    r = (
        db.query(TopUpRequest)
        .filter(TopUpRequest.reference_no == reference_no, TopUpRequest.user_id == session.user_id)
        .first()
    )
    if not r:
        raise HTTPException(status_code=404, detail="Top up not found")
    return _topup_out(r)


@router.post("/wallet/topups", response_model=TopUpOut)
async def create_topup(
    amount: int = Form(...),
    paymentMethod: str = Form(...),
    bankMethodId: Optional[str] = Form(None),
    senderName: str = Form(""),
    senderBank: str = Form(""),
    senderAccount: str = Form(""),
    note: Optional[str] = Form(None),
    proof: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    session: AgentSession = Depends(get_agent_session),
    client: BackendClient = Depends(get_backend_client),
):
    try:
        form = TopUpForm(amount=amount, paymentMethod=paymentMethod, bankMethodId=bankMethodId or None,
                         senderName=senderName, senderBank=senderBank, senderAccount=senderAccount, note=note)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    doc = None
    if proof is not None and proof.filename:
        doc = UploadedDocument(filename=proof.filename, content=await proof.read(),
                               content_type=proof.content_type or "application/octet-stream")
    try:
        req = request_topup(db, client, session.user, form, doc)
    except TopUpValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BackendError as e:
        raise HTTPException(status_code=502, detail=e.message)
    return _topup_out(req)
