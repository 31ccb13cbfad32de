from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from handling_portal.db.session import get_db
from handling_portal.api.deps import require_roles
from handling_portal.models.user import User
from handling_portal.schemas.booking import DiscountOut, DiscountSaveIn
from handling_portal.services.discount_service import save_discount_snapshot
from handling_portal.services.pricing_service import load_price_table, unit_price

router = APIRouter(tags=["admin"])


@router.put("/agents/{user_id}/discount", response_model=DiscountOut)
def set_agent_discount(user_id: str, body: DiscountSaveIn, db: Session = Depends(get_db),
                       me: User = Depends(require_roles("Admin"))):
    agent = db.get(User, user_id)
    if not agent:
        raise HTTPException(status_code=404, detail="User not found")
    unit = unit_price(load_price_table(db).sell, body.travelTypes)
    try:
        result = save_discount_snapshot(db, agent, body.value, body.passengers, unit)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return DiscountOut(
        userId=agent.id,
        kind=agent.handling_discount_kind,
        perPassenger=int(agent.handling_discount_value or 0),
        discountAmount=result.discount_amount,
        totalAfterDiscount=result.payable_total,
        active=bool(agent.handling_discount_active),
    )
