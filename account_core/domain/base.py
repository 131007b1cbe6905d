import uuid
from datetime import UTC, datetime

# Schema version written to every record, used for data migration.
SV = 1


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC now; stored timestamps carry no tzinfo."""
    return datetime.now(UTC).replace(tzinfo=None)
