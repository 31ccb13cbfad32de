"""Group booking discounts.

Two discounts can apply to a booking. A membership percentage comes off the subtotal
first, then the agent's flat per-passenger amount. The agent amount is capped at
whatever is left, so the payable total never goes below zero.
"""
import logging
import math
from dataclasses import dataclass

from sqlalchemy.orm import Session

from handling_portal.models.membership import Membership
from handling_portal.models.user import User

log = logging.getLogger(__name__)

DISCOUNT_KIND_AMOUNT = "AMOUNT"


@dataclass
class Discount:
    kind: str = DISCOUNT_KIND_AMOUNT
    value: float = 0
    cap: int | None = None  # stored on the profile, not applied
    active: bool = False

    @classmethod
    def from_user(cls, user: User) -> "Discount":
        return cls(
            kind=user.handling_discount_kind or DISCOUNT_KIND_AMOUNT,
            value=user.handling_discount_value or 0,
            cap=user.handling_discount_cap,
            active=bool(user.handling_discount_active),
        )


@dataclass
class MembershipDiscount:
    percentage: float = 0
    active: bool = False

    @classmethod
    def for_user(cls, db: Session, user_id: str) -> "MembershipDiscount":
        m = db.query(Membership).filter(Membership.user_id == user_id).first()
        if not m:
            return cls()
        return cls(percentage=m.discount_percentage or 0, active=bool(m.is_active))


@dataclass
class DiscountResult:
    discount_amount: int
    payable_total: int


@dataclass
class Quote:
    original_total: int
    membership_amount: int
    agent_discount_amount: int
    payable_total: int

    @property
    def has_discount(self) -> bool:
        return self.payable_total < self.original_total


def apply_discount(subtotal: int, discount: Discount | None, passenger_count: int) -> DiscountResult:
    if not discount or not discount.active or not discount.value:
        return DiscountResult(discount_amount=0, payable_total=subtotal)
    per_passenger = math.floor(discount.value)
    raw = per_passenger * passenger_count
    final = min(raw, subtotal)
    return DiscountResult(discount_amount=final, payable_total=max(0, subtotal - final))


def apply_membership(subtotal: int, membership: MembershipDiscount | None) -> DiscountResult:
    if not membership or not membership.active or membership.percentage <= 0:
        return DiscountResult(discount_amount=0, payable_total=subtotal)
    amount = int(subtotal * membership.percentage / 100)
    return DiscountResult(discount_amount=amount, payable_total=max(0, subtotal - amount))


def quote(subtotal: int, passenger_count: int, discount: Discount | None = None,
          membership: MembershipDiscount | None = None) -> Quote:
    after_membership = apply_membership(subtotal, membership)
    after_agent = apply_discount(after_membership.payable_total, discount, passenger_count)
    return Quote(
        original_total=subtotal,
        membership_amount=after_membership.discount_amount,
        agent_discount_amount=after_agent.discount_amount,
        payable_total=after_agent.payable_total,
    )


def save_discount_snapshot(db: Session, user: User, value: float, passenger_count: int, unit_price: int) -> DiscountResult:
    """Operator action: store the agent's flat discount and the totals it yields for
    `passenger_count` passengers at `unit_price` each."""
    if value is None or value < 0:
        raise ValueError("discount value must be >= 0")
    if passenger_count < 1:
        raise ValueError("passenger count must be >= 1")
    per_passenger = math.floor(value)
    result = apply_discount(
        unit_price * passenger_count,
        Discount(kind=DISCOUNT_KIND_AMOUNT, value=per_passenger, active=True),
        passenger_count,
    )
    user.handling_discount_kind = DISCOUNT_KIND_AMOUNT
    user.handling_discount_value = per_passenger
    user.handling_discount_amount = result.discount_amount
    user.total_after_discount = result.payable_total
    user.handling_discount_active = True
    user.handling_discount_is_percentage = False
    db.commit()
    log.info("agent discount saved", extra={"user_id": user.id, "per_passenger": per_passenger,
                                            "discount_amount": result.discount_amount})
    return result
