class MessageError(Exception):
    """A message the router cannot dispatch. Programmer error."""

    def __init__(self, pattern: str, reason: str = "unknown message pattern"):
        self.pattern = pattern
        super().__init__(f"{reason}: {pattern}")
