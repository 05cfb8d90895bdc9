from fastapi import status

# Error codes returned in the "code" field of error responses
BAD_REQUEST_ERROR_CODE = "ER-400"
VALIDATION_ERROR_CODE = "ER-422"
NOT_FOUND_ERROR_CODE = "ER-404"
INTERNAL_SERVER_ERROR_CODE = "ER-500"


class OrderServiceError(Exception):
    """Base class for errors rendered as {"message", "code"} responses"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = INTERNAL_SERVER_ERROR_CODE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {"message": self.message, "code": self.code}


class BadRequestError(OrderServiceError):
    """Malformed JSON, wrong content type or bad path parameter"""

    status_code = status.HTTP_400_BAD_REQUEST
    code = BAD_REQUEST_ERROR_CODE


class ValidationError(OrderServiceError):
    """Payload is well-formed but violates the order rules"""

    status_code = status.HTTP_400_BAD_REQUEST
    code = VALIDATION_ERROR_CODE


class NotFoundError(OrderServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    code = NOT_FOUND_ERROR_CODE


class InternalServerError(OrderServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    code = INTERNAL_SERVER_ERROR_CODE
