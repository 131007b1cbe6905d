class ContextError(Exception):
    """Required internal context is missing. Programmer error, never returned as an outcome."""


class DuplicateKeyError(Exception):
    """The store rejected a write on a unique field."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"duplicate value for unique field: {field}")
