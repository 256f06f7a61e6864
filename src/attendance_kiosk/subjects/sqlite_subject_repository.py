from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..core.enums import PayBasis, SubjectStatus
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import BankDetails, CompensationConfig, Subject
from .repository import SubjectRepository

_COLUMNS = (
    "subject_id, name, department, role, status, shift_id, joining_date, pay_basis, base_amount, "
    "currency, overtime_multiplier, visual_signature, thumbnail, email, phone, dob, address, "
    "bank_account_number, bank_ifsc, bank_name"
)


def _opt_date(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def _to_subject(r: Dict[str, Any]) -> Subject:
    return Subject(
        subject_id=r["subject_id"],
        name=r["name"],
        department=r.get("department") or "",
        role=r.get("role") or "",
        status=SubjectStatus(r["status"]),
        shift_id=r.get("shift_id"),
        joining_date=_opt_date(r.get("joining_date")),
        compensation=CompensationConfig(
            pay_basis=PayBasis(r["pay_basis"]),
            base_amount=Decimal(r["base_amount"]),
            currency=r["currency"],
            overtime_multiplier=Decimal(r["overtime_multiplier"]),
        ),
        visual_signature=r.get("visual_signature") or "",
        thumbnail=r.get("thumbnail") or "",
        email=r.get("email") or "",
        phone=r.get("phone") or "",
        dob=_opt_date(r.get("dob")),
        address=r.get("address") or "",
        bank=BankDetails(
            account_number=r.get("bank_account_number") or "",
            ifsc=r.get("bank_ifsc") or "",
            bank_name=r.get("bank_name") or "",
        ),
    )


class SQLiteSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, subject_id: str) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM subjects WHERE subject_id=?", (subject_id,))
            r = fetchone(cur)
            return _to_subject(r) if r else None

    def list_all(self) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM subjects ORDER BY name")
            return [_to_subject(r) for r in fetchall(cur)]

    def save(self, subject: Subject) -> None:
        c = subject.compensation
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT OR REPLACE INTO subjects({_COLUMNS})
                VALUES(?,?,?,?,?,?,?,?,?,?,?,?,?,?,?,?,?,?,?,?)
                """,
                (
                    subject.subject_id,
                    subject.name,
                    subject.department,
                    subject.role,
                    subject.status.value,
                    subject.shift_id,
                    subject.joining_date.isoformat() if subject.joining_date else None,
                    c.pay_basis.value,
                    str(c.base_amount),
                    c.currency,
                    str(c.overtime_multiplier),
                    subject.visual_signature,
                    subject.thumbnail,
                    subject.email,
                    subject.phone,
                    subject.dob.isoformat() if subject.dob else None,
                    subject.address,
                    subject.bank.account_number,
                    subject.bank.ifsc,
                    subject.bank.bank_name,
                ),
            )
