"""
Error types shared by the validator, store and HTTP layer.

Client errors carry a short ``message`` tag and a longer ``long_message``
explanation; the server renders both verbatim as the JSON error body.
"""
from typing import Dict


class ShiptivityError(Exception):
    """Base class for all Shiptivity errors."""
    pass


class ClientError(ShiptivityError):
    """A request the caller can fix. Rendered as HTTP 400."""

    message = "Invalid request."
    long_message = ""

    def __init__(self, long_message: str = "", message: str = ""):
        if message:
            self.message = message
        if long_message:
            self.long_message = long_message
        super().__init__(f"{self.message} {self.long_message}".strip())

    def to_dict(self) -> Dict[str, str]:
        return {"message": self.message, "long_message": self.long_message}


class InvalidId(ClientError):
    """Raised when a client id is not an integer or does not exist."""
    message = "Invalid id provided."

    NOT_AN_INTEGER = "not an integer"
    NOT_FOUND = "not found"

    _explanations = {
        NOT_AN_INTEGER: "Id can only be integer.",
        NOT_FOUND: "Cannot find client with that id.",
    }

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(self._explanations[reason])


class InvalidLane(ClientError):
    """Raised when a status is not one of the recognised lanes."""
    message = "Invalid status provided."
    long_message = "Status can only be one of the following: [backlog | in-progress | complete]."


class InvalidPriority(ClientError):
    """Raised when a priority is present but not a positive integer."""
    message = "Invalid priority provided."
    long_message = "Priority can only be positive integer."


class StoreError(ShiptivityError):
    """Raised when the SQLite store fails to read or write."""

    message = "Storage failure."

    def to_dict(self) -> Dict[str, str]:
        return {"message": self.message, "long_message": str(self)}
