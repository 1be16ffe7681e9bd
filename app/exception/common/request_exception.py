from app.exception.base_exception import BaseCustomException, ErrorCode

class InvalidRequestError(BaseCustomException):
    """요청 본문이 JSON이 아니거나 필드 타입이 맞지 않는 경우"""
    error_code = ErrorCode.COMMON_BAD_REQUEST
    message = "Invalid request"
    status_code = 400
