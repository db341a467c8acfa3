class AppError(Exception):
    """
    Base error of the service layer.
    Carries the code/status pair the controllers turn into a JSON response.
    """

    def __init__(self, code: str, message: str, status: int = 400, details=None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.status = status
        self.details = details


class NotFoundError(AppError):
    def __init__(self, resource: str, resource_id=None):
        message = (
            f"{resource} with id {resource_id} not found"
            if resource_id is not None
            else f"{resource} not found"
        )
        super().__init__("NOT_FOUND", message, 404)
        self.resource = resource
        self.resource_id = resource_id


class ValidationError(AppError):
    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, 400, details)


class ConflictError(AppError):
    def __init__(self, message: str, details=None):
        super().__init__("CONFLICT", message, 409, details)
