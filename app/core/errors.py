from fastapi import HTTPException, status

# Errors raised by the crud layer. Each one is an HTTPException so routes can
# let FastAPI render it with the right status code.


class ValidationError(HTTPException):
    def __init__(self, detail: str = "invalid input"):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class InvalidAddress(ValidationError):
    pass


class Locked(HTTPException):
    def __init__(self, detail: str = "whitelist is locked"):
        super().__init__(status_code=status.HTTP_423_LOCKED, detail=detail)


class DuplicateActive(HTTPException):
    def __init__(self, detail: str = "This wallet is already on the whitelist"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class ApplicationsClosed(HTTPException):
    def __init__(self, detail: str = "applications are closed"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class InvalidState(HTTPException):
    def __init__(self, detail: str = "invalid status transition"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class Forbidden(HTTPException):
    def __init__(self, detail: str = "not the project owner"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class StoreError(HTTPException):
    def __init__(self, detail: str = "store error"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)
