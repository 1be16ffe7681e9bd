from app.exception.base_exception import BaseCustomException, ErrorCode

class UnauthorizedError(BaseCustomException):
    """인증 정보(Bearer 토큰)가 없거나 유효하지 않은 경우"""
    error_code = ErrorCode.UNAUTHORIZED
    message = "Unauthorized"
    status_code = 401

class InvalidUserIdError(BaseCustomException):
    error_code = ErrorCode.INVALID_USER_ID
    message = "Invalid user_id"
    status_code = 400
