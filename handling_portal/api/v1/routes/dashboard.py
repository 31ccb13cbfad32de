from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from handling_portal.db.session import get_db
from handling_portal.api.deps import get_agent_session
from handling_portal.models.agent_user import AgentUser
from handling_portal.services.agent_session import AgentSession
from handling_portal.services.dashboard_service import (
    export_csv, export_filename, filter_orders, get_order, invoice, list_orders, summarize,
)

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard/orders")
def orders(code: Optional[str] = "", paymentMethod: Optional[str] = "", status: Optional[str] = "",
           db: Session = Depends(get_db), session: AgentSession = Depends(get_agent_session)):
    all_orders = list_orders(db, session.user_id)
    shown = filter_orders(all_orders, code or "", paymentMethod or "", status or "")
    return {"summary": summarize(all_orders), "items": [o.as_dict() for o in shown]}


@router.get("/dashboard/orders.csv")
def orders_csv(code: Optional[str] = "", paymentMethod: Optional[str] = "", status: Optional[str] = "",
               db: Session = Depends(get_db), session: AgentSession = Depends(get_agent_session)):
    """Download the (filtered) order list as CSV."""
    shown = filter_orders(list_orders(db, session.user_id), code or "", paymentMethod or "", status or "")
    return Response(
        content=export_csv(shown),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )


@router.get("/dashboard/orders/{code}")
def order_invoice(code: str, db: Session = Depends(get_db), session: AgentSession = Depends(get_agent_session)):
    b = get_order(db, session.user_id, code)
    if not b:
        raise HTTPException(404, "Booking not found")
    return invoice(db, b)


@router.get("/dashboard/profile")
def profile(db: Session = Depends(get_db), session: AgentSession = Depends(get_agent_session)):
    u = session.user
    agent = db.get(AgentUser, u.id)
    return {
        "id": u.id,
        "email": u.email,
        "fullName": u.full_name or "",
        "companyName": u.company_name or "",
        "phoneNumber": u.phone_number or "",
        "role": u.role,
        "status": u.status,
        "saldo": session.saldo,
        "discount": {
            "active": session.discount.active,
            "perPassenger": int(session.discount.value) if session.discount.active else 0,
        },
        "membershipDiscountPercentage": session.membership.percentage if session.membership.active else 0,
        "agentProfile": _agent_profile(agent),
    }


def _agent_profile(agent: AgentUser | None) -> dict | None:
    if agent is None:
        return None
    return {
        "companyName": agent.company_name or "",
        "fullName": agent.full_name or "",
        "email": agent.email,
        "phoneNumber": agent.phone_number or "",
        "status": agent.status,
        "ktpUrl": agent.ktp_url,
        "nibUrl": agent.nib_url,
        "createdAt": agent.created_at.isoformat() if agent.created_at else "",
    }
