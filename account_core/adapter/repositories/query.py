"""
Translate exact-match query dicts into SQL filters.
"""

from typing import Any, Dict, List, Tuple

from sqlalchemy.exc import IntegrityError

from account_core.app.errors import DuplicateKeyError


def split_query(model, query: Dict[str, Any]) -> Tuple[List[Any], Dict[str, Any]]:
    """Column filters for known columns; the rest is returned for custom matching"""
    columns = model.__table__.c
    clauses, extra = [], {}
    for key, value in query.items():
        if key in columns:
            clauses.append(columns[key] == value)
        else:
            extra[key] = value
    return clauses, extra


def duplicate_key(exc: IntegrityError, fields: Tuple[str, ...]) -> DuplicateKeyError:
    message = str(exc.orig).lower()
    for field in fields:
        if field in message:
            return DuplicateKeyError(field)
    return DuplicateKeyError(fields[0])
