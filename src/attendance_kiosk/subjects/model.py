from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.constants import DEFAULT_CURRENCY, DEFAULT_OVERTIME_MULTIPLIER
from ..core.enums import PayBasis, SubjectStatus


@dataclass(frozen=True)
class CompensationConfig:
    pay_basis: PayBasis
    base_amount: Decimal
    currency: str = DEFAULT_CURRENCY
    # Carried for the payroll view, never applied to amounts.
    overtime_multiplier: Decimal = Decimal(DEFAULT_OVERTIME_MULTIPLIER)


@dataclass(frozen=True)
class BankDetails:
    account_number: str = ""
    ifsc: str = ""
    bank_name: str = ""


@dataclass(frozen=True)
class Subject:
    """Domain entity: a person on the roster (student, staff or member).

    Note: plain data object, no storage access here.
    """

    subject_id: str
    name: str
    department: str
    role: str
    compensation: CompensationConfig
    shift_id: Optional[str] = None
    status: SubjectStatus = SubjectStatus.ACTIVE
    joining_date: Optional[date] = None
    visual_signature: str = ""
    thumbnail: str = ""
    email: str = ""
    phone: str = ""
    dob: Optional[date] = None
    address: str = ""
    bank: BankDetails = field(default_factory=BankDetails)

    @property
    def is_active(self) -> bool:
        return self.status == SubjectStatus.ACTIVE

    @property
    def first_name(self) -> str:
        return self.name.split(" ")[0] if self.name else ""
