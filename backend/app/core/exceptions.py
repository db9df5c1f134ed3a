class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(self, message: str, status_code: int = 500, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

class InputValidationError(AppError):
    """Raised when timetable inputs are incomplete and generation or save cannot proceed."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=422, details=details)

class FacultyOverloadError(AppError):
    """Raised when a faculty member exceeds the weekly slot limit and the caller has not confirmed."""
    def __init__(self, warnings: list[str]):
        super().__init__(
            "There are faculty slot conflicts. Confirm to proceed anyway.",
            status_code=409,
            details={"warnings": warnings},
        )

class TimetableConflictError(AppError):
    """Raised when a grid collides with faculty bookings in saved timetables."""
    def __init__(self, conflicts: list[str]):
        message = "Cannot save timetable due to faculty conflicts:\n" + "\n".join(conflicts)
        super().__init__(message, status_code=409, details={"conflicts": conflicts})

class ConflictCheckError(AppError):
    """Raised when the stored slot bookings cannot be queried."""
    def __init__(self, message: str = "Failed to check faculty conflicts"):
        super().__init__(message, status_code=503)

class PersistenceError(AppError):
    """Raised when timetable metadata or slot rows cannot be written."""
    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=500, details=details)

class ResourceNotFoundError(AppError):
    """Raised when a requested resource is not found."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(f"{resource_type} with id {resource_id} not found", status_code=404)

class ConfigurationError(AppError):
    """Raised when system configuration is invalid."""
    def __init__(self, message: str):
        super().__init__(message, status_code=500)
