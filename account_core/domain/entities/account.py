"""
Account Entity

Represents one end-user identity.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, Optional

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel, String

from ..base import SV, generate_uuid, utcnow

# Public field name -> attribute name, where they differ.
FIELD_ALIASES = {"pass": "pass_"}


class Account(SQLModel, table=True):
    """
    Account entity - one end-user identity.

    Business Rules:
    - handle is unique, lowercase-normalized and policy constrained
    - email is optional but unique when present
    - pass/salt are opaque values produced by the password hasher
    - inactive accounts cannot authenticate
    - custom request fields are kept in ``custom`` and flattened on output
    """

    __tablename__ = "sys_user"

    id: str = Field(default_factory=generate_uuid, primary_key=True, max_length=36)

    handle: str = Field(unique=True, index=True, max_length=255)
    email: Optional[str] = Field(default=None, unique=True, index=True, max_length=255)
    name: Optional[str] = Field(default=None, max_length=255)
    active: bool = Field(default=True)

    pass_: Optional[str] = Field(default=None, sa_column=Column("pass", String, nullable=True))
    salt: Optional[str] = Field(default=None, max_length=255)

    custom: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON))

    sv: int = Field(default=SV)
    when: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_sys_user_active", "active"),)

    @classmethod
    def column_names(cls) -> set:
        return {"id", "handle", "email", "name", "active", "pass", "salt", "sv", "when"}

    def get(self, name: str, default: Any = None) -> Any:
        if name in self.column_names():
            value = getattr(self, FIELD_ALIASES.get(name, name))
            return default if value is None else value
        return (self.custom or {}).get(name, default)

    def set_custom(self, values: Dict[str, Any]) -> None:
        # Reassign so the JSON column is flagged dirty.
        merged = dict(self.custom or {})
        merged.update(values)
        self.custom = merged

    def view(self, fields: Optional[Iterable[str]] = None) -> Dict[str, Any]:
        """Flat dict of the account, projected to ``fields`` when given."""
        full: Dict[str, Any] = dict(self.custom or {})
        full.update(
            {
                "id": self.id,
                "handle": self.handle,
                "email": self.email,
                "name": self.name,
                "active": self.active,
                "pass": self.pass_,
                "salt": self.salt,
                "sv": self.sv,
                "when": self.when.isoformat() if self.when else None,
            }
        )
        if fields is None:
            return full
        wanted = ["id", *fields]
        return {f: full.get(f) for f in dict.fromkeys(wanted) if f in full}
