"""
Verification Entity

Pending confirmation challenge bound to an account and a purpose.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import SV, generate_uuid, utcnow


class Verification(SQLModel, table=True):
    """
    Verification entity - short-lived challenge token.

    Business Rules:
    - Valid only before expiry and only while active (unconsumed)
    - Single-use: active flips to False when checked successfully
    - kind names the purpose, e.g. "email", "password-reset"
    """

    __tablename__ = "sys_verify"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=36)

    code: str = Field(unique=True, index=True, max_length=64)
    user_id: str = Field(index=True, max_length=36)
    kind: str = Field(max_length=100)

    active: bool = Field(default=True)
    expiry: datetime = Field(sa_column=Column(DateTime))
    used_when: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    sv: int = Field(default=SV)
    when: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_sys_verify_user_kind", "user_id", "kind"),
        Index("idx_sys_verify_expiry", "expiry"),
    )

    def view(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.data or {})
        out.update(
            {
                "id": self.id,
                "code": self.code,
                "user_id": self.user_id,
                "kind": self.kind,
                "active": self.active,
                "expiry": self.expiry.isoformat(),
                "used_when": self.used_when.isoformat() if self.used_when else None,
                "sv": self.sv,
                "when": self.when.isoformat() if self.when else None,
            }
        )
        return out
