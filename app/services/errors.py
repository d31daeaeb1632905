from __future__ import annotations


class RecordNotFound(LookupError):
    """Raised when a row addressed by id or code does not exist."""

    def __init__(self, kind: str, key) -> None:
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class ChildCodeConflict(RuntimeError):
    """No free child code could be allocated within the configured number of attempts."""
