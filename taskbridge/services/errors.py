"""Domain errors raised by the workflow services.

Routers never catch these individually; ``taskbridge.main`` maps the whole
hierarchy onto HTTP responses.
"""

from typing import Optional


class TaskBridgeError(Exception):
    """Base exception for workflow service errors."""

    status_code = 400
    code = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.code, "detail": self.message}


class ValidationError(TaskBridgeError):
    """Missing or malformed input. The message is shown to the caller verbatim."""

    status_code = 400
    code = "validation_error"


class AuthorizationError(TaskBridgeError):
    """Role or ownership mismatch."""

    status_code = 403
    code = "forbidden"

    def __init__(self, message: str = "You are not allowed to perform this action"):
        super().__init__(message)


class NotFoundError(TaskBridgeError):
    """Resource missing, or hidden from the caller."""

    status_code = 404
    code = "not_found"


class ConflictError(TaskBridgeError):
    """Lost a race against another writer. Refresh instead of retrying."""

    status_code = 409
    code = "conflict"


class InvalidTransitionError(TaskBridgeError):
    """The task is not in a state where the requested transition applies."""

    status_code = 409
    code = "invalid_transition"

    def __init__(self, transition: str, message: Optional[str] = None):
        super().__init__(message or f"Transition '{transition}' is not allowed from the task's current state")
        self.transition = transition

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["transition"] = self.transition
        return data
