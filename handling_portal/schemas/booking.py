from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import List, Optional

from handling_portal.services.travel_selection import TravelType, validate_areas, is_consistent
from handling_portal.services.payment_gate import PaymentMethodKind


class GroupBookingDraft(BaseModel):
    companyName: str = Field(min_length=1)
    fullName: str = Field(min_length=2)
    email: EmailStr
    phone: str = Field(min_length=8)
    passengers: int = Field(ge=1, le=200)
    flightNumber: str = Field(min_length=2)
    country: str = Field(min_length=1)
    city: str = Field(min_length=1)
    travelTypes: List[TravelType] = Field(min_length=1)
    additionalBaggage: int = Field(default=0, ge=0)
    pickupArea: Optional[str] = ""
    dropoffArea: Optional[str] = ""
    pickupDate: str = Field(min_length=1)
    pickupTime: str = Field(min_length=1)
    notes: Optional[str] = ""

    @field_validator("travelTypes")
    @classmethod
    def dedupe_travel_types(cls, v: List[TravelType]) -> List[TravelType]:
        out: List[TravelType] = []
        for t in v:
            if t not in out:
                out.append(t)
        return out

    @model_validator(mode="after")
    def travel_types_and_areas(self):
        if not is_consistent(self.travelTypes):
            raise ValueError("Transit tidak dapat digabung dengan arrival atau departure")
        msg = validate_areas(self.travelTypes, self.pickupArea, self.dropoffArea)
        if msg:
            raise ValueError(msg)
        return self


class PaymentIn(BaseModel):
    method: Optional[PaymentMethodKind] = None
    bankMethodId: Optional[str] = None


class GroupBookingSubmit(BaseModel):
    draft: GroupBookingDraft
    payment: PaymentIn


class SelectionIn(BaseModel):
    travelTypes: List[TravelType] = []
    pickupArea: str = ""
    dropoffArea: str = ""
    toggle: TravelType
    checked: bool


class SelectionOut(BaseModel):
    state: str
    travelTypes: List[TravelType]
    pickupArea: str
    dropoffArea: str
    needsPickup: bool
    needsDropoff: bool


class QuoteOut(BaseModel):
    travelTypes: List[TravelType]
    serviceUnitPrice: int
    baggageUnitPrice: int
    serviceTotal: int
    baggageTotal: int
    originalTotal: int
    membershipDiscountPercentage: float = 0
    membershipDiscountAmount: int = 0
    agentDiscountPerPassenger: int = 0
    agentDiscountAmount: int = 0
    totalPayable: int
    saldo: int
    saldoAllowed: bool
    priceFallback: bool = False


class GroupBookingOut(BaseModel):
    bookingId: str
    bookingCode: str
    status: str
    paymentStatus: str
    paymentMethod: PaymentMethodKind
    bankName: Optional[str] = None
    originalTotal: int
    totalPayable: int
    saldo: int


class DiscountSaveIn(BaseModel):
    value: float = Field(ge=0)
    passengers: int = Field(default=1, ge=1, le=200)
    travelTypes: List[TravelType] = Field(min_length=1)


class DiscountOut(BaseModel):
    userId: str
    kind: str
    perPassenger: int
    discountAmount: int
    totalAfterDiscount: int
    active: bool
