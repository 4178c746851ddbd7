from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    def __init__(self, error_detail_message: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=error_detail_message)


class CuratedDateNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("Curated date not found")


class TransactionNotFoundError(NotFoundError):
    def __init__(self):
        super().__init__("Transaction not found")


class ConflictError(HTTPException):
    def __init__(self, error_detail_message: str):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=error_detail_message)


class AuthorizationError(HTTPException):
    def __init__(self, error_detail_message: str = "Admin access required"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=error_detail_message)


class DatabaseError(HTTPException):
    def __init__(self, error_detail_message: str):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error_detail_message)


class ServerError(HTTPException):
    def __init__(self, error_detail_message: str):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error_detail_message)


class EmailSendError(HTTPException):
    def __init__(self, error_detail_message: str):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error_detail_message)


class ValidationError(HTTPException):
    def __init__(self, error_detail_message: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=error_detail_message)
