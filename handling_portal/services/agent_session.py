from dataclasses import dataclass

from sqlalchemy.orm import Session

from handling_portal.models.user import User
from handling_portal.services.discount_service import Discount, MembershipDiscount


@dataclass
class AgentSession:
    """Who is acting, with the wallet and discounts their bookings are priced with."""
    user: User
    discount: Discount
    membership: MembershipDiscount
    access_token: str = ""

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def role(self) -> str:
        return self.user.role

    @property
    def saldo(self) -> int:
        return int(self.user.saldo or 0)

    @property
    def is_admin(self) -> bool:
        return (self.user.role or "").lower() == "admin"


def build_session(db: Session, user: User, access_token: str = "") -> AgentSession:
    return AgentSession(
        user=user,
        discount=Discount.from_user(user),
        membership=MembershipDiscount.for_user(db, user.id),
        access_token=access_token,
    )
