from app.exception.base_exception import BaseCustomException, ErrorCode


class UserNotFoundError(BaseCustomException):
    """인증은 통과했지만 저장소에 프로비저닝되지 않은 사용자"""
    error_code = ErrorCode.USER_NOT_FOUND
    message = "User not found"
    status_code = 404


class AssetNotFoundError(BaseCustomException):
    error_code = ErrorCode.ASSET_NOT_FOUND
    message = "Asset not found in favourites"
    status_code = 404


class UnknownAssetTypeError(BaseCustomException):
    error_code = ErrorCode.UNKNOWN_ASSET_TYPE
    message = "Unknown asset type"
    status_code = 400


class InvalidAssetPayloadError(BaseCustomException):
    """에셋 payload가 선택된 타입의 필드 구조로 파싱되지 않는 경우"""
    def __init__(self, kind: str):
        super().__init__(
            message=f"Invalid {kind} asset",
            error_code=ErrorCode.INVALID_ASSET_PAYLOAD,
            status_code=400
        )


class InvalidAssetIdError(BaseCustomException):
    error_code = ErrorCode.INVALID_ASSET_ID
    message = "Invalid asset_id"
    status_code = 400
