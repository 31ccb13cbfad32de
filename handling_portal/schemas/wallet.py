from pydantic import BaseModel, Field
from typing import Optional

from handling_portal.services.payment_gate import PaymentMethodKind


class TopUpForm(BaseModel):
    amount: int = Field(gt=0)
    paymentMethod: PaymentMethodKind
    bankMethodId: Optional[str] = None
    senderName: str = ""
    senderBank: str = ""
    senderAccount: str = ""
    note: Optional[str] = None


class TopUpOut(BaseModel):
    referenceNo: str
    amount: int
    status: str
    paymentMethod: str
    bankName: str = ""
    destinationAccount: str = ""
    accountHolder: Optional[str] = None
    proofUrl: str = ""
    createdAt: Optional[str] = None


class LedgerEntryOut(BaseModel):
    id: str
    codeBooking: str = ""
    nominal: int
    saldoAkhir: int
    description: str
    kind: Optional[str] = None
    status: Optional[str] = None
    transDate: Optional[str] = None
