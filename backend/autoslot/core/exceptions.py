class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class SchedulerError(AppError):
    """Raised when the scheduler encounters a logical error or invalid state."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=400, details=details)

class PreconditionError(SchedulerError):
    """Raised when there is nothing meaningful to schedule (no periods, no lessons, no days)."""

class RequirementError(SchedulerError):
    """Raised for a single lesson requirement whose snapshot is inconsistent.

    The allocator catches it, records the requirement as a full conflict and moves on.
    """
    def __init__(self, requirement_id: str, message: str):
        super().__init__(message, details={"requirement_id": requirement_id})
        self.requirement_id = requirement_id

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)
