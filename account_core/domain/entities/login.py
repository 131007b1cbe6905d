"""
Login Entity

One authenticated session or one single-use action token.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from ..base import SV, generate_uuid, utcnow


class Login(SQLModel, table=True):
    """
    Login entity - a bearer token bound to an account.

    Business Rules:
    - token is random (uuid4) and never derived from account data
    - handle/email are copied from the account at creation time
    - onetime logins carry a second, single-use token with an absolute expiry
    - expiry is checked lazily when the token is presented
    - user_id is a plain reference; removing the login never touches the account
    """

    __tablename__ = "sys_login"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=36)

    token: str = Field(unique=True, index=True, max_length=64)
    user_id: str = Field(index=True, max_length=36)

    handle: Optional[str] = Field(default=None, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)

    active: bool = Field(default=True)
    why: str = Field(max_length=100)

    onetime_token: Optional[str] = Field(default=None, unique=True, index=True, max_length=64)
    onetime_active: Optional[bool] = Field(default=None)
    onetime_expiry: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    login_data: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    sv: int = Field(default=SV)
    when: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_sys_login_user_active", "user_id", "active"),
    )

    @property
    def is_onetime(self) -> bool:
        return self.onetime_token is not None

    def view(self) -> Dict[str, Any]:
        out: Dict[str, Any] = dict(self.login_data or {})
        out.update(
            {
                "id": self.id,
                "token": self.token,
                "user_id": self.user_id,
                "handle": self.handle,
                "email": self.email,
                "active": self.active,
                "why": self.why,
                "sv": self.sv,
                "when": self.when.isoformat() if self.when else None,
            }
        )
        if self.is_onetime:
            out["onetime_token"] = self.onetime_token
            out["onetime_active"] = self.onetime_active
            out["onetime_expiry"] = self.onetime_expiry.isoformat()
        return out
