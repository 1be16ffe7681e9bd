from fastapi import APIRouter, Body, Depends, Query, status
from typing import Any, Dict, List, Optional
import uuid
from pydantic import BaseModel, Field
from app.api.dependencies import get_current_user_id, get_favourite_service
from app.core.response import ApiResponse, success_response
from app.services.favourite_service import FavouriteService
from app.validate.favourite_validator import parse_limit, parse_offset, validate_asset_id

router = APIRouter(
    prefix="/favourites",
    tags=["Favourites"],
    responses={
        401: {"description": "Unauthorized"},
        404: {"description": "User or asset not found"},
    },
)


class AddAssetRequest(BaseModel):
    """에셋 추가 요청 Envelope"""
    type: str = Field("", description="에셋 종류 (chart | insight | audience)")
    asset: Any = Field(None, description="에셋 종류별 필드 (JSON object)")
    favorite: bool = Field(False, description="즐겨찾기 여부 (asset 내부 값보다 우선)")


class SetFavoriteRequest(BaseModel):
    favorite: bool = False


class SetDescriptionRequest(BaseModel):
    description: str = ""


@router.get("", status_code=status.HTTP_200_OK)
def list_favourites(
    limit: Optional[str] = Query(None, description="최대 반환 개수 (0 또는 미지정 시 전체)"),
    offset: Optional[str] = Query(None, description="건너뛸 개수"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: FavouriteService = Depends(get_favourite_service),
) -> ApiResponse[List[Dict[str, Any]]]:
    """
    즐겨찾기 목록 조회

    - **limit / offset**: 페이지네이션. 숫자가 아니거나 음수면 무시
    - **Header(Authorization)**: Bearer JWT

    Returns:
        200 OK: favorite == true 인 에셋 목록 (삽입 순서)
    """
    assets = service.list_favourites(user_id, limit=parse_limit(limit), offset=parse_offset(offset))
    return success_response([asset.to_response() for asset in assets])


@router.post("/add", status_code=status.HTTP_201_CREATED)
def add_favourite(
    req: AddAssetRequest = Body(...),
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: FavouriteService = Depends(get_favourite_service),
) -> ApiResponse[Dict[str, Any]]:
    """
    에셋 추가

    - **type**: chart | insight | audience
    - **asset**: 종류별 필드. id가 없거나 nil UUID이면 서버가 새로 발급
    - **favorite**: 즐겨찾기 여부

    Returns:
        201 Created: 생성된 에셋
    """
    asset = service.add_asset(user_id, req.type, req.asset, req.favorite)
    return success_response(asset.to_response())


@router.put("/remove", status_code=status.HTTP_200_OK)
def set_favourite_flag(
    req: SetFavoriteRequest,
    asset_id: Optional[str] = Query(None, description="에셋 ID (UUID)"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: FavouriteService = Depends(get_favourite_service),
) -> ApiResponse[Dict[str, Any]]:
    """
    에셋 즐겨찾기 여부 변경

    Returns:
        200 OK: 변경된 에셋
    """
    asset = service.set_favorite(user_id, validate_asset_id(asset_id), req.favorite)
    return success_response(asset.to_response())


@router.put("/edit", status_code=status.HTTP_200_OK)
def edit_description(
    req: SetDescriptionRequest,
    asset_id: Optional[str] = Query(None, description="에셋 ID (UUID)"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: FavouriteService = Depends(get_favourite_service),
) -> ApiResponse[Dict[str, Any]]:
    """
    에셋 설명 변경 (빈 문자열 허용)

    Returns:
        200 OK: 변경된 에셋
    """
    asset = service.set_description(user_id, validate_asset_id(asset_id), req.description)
    return success_response(asset.to_response())


@router.delete("/delete", status_code=status.HTTP_200_OK)
def delete_favourite(
    asset_id: Optional[str] = Query(None, description="에셋 ID (UUID)"),
    user_id: uuid.UUID = Depends(get_current_user_id),
    service: FavouriteService = Depends(get_favourite_service),
) -> ApiResponse[List[Dict[str, Any]]]:
    """
    에셋 삭제

    Returns:
        200 OK: 삭제 후 남은 전체 에셋 목록
    """
    remaining = service.delete_asset(user_id, validate_asset_id(asset_id))
    return success_response([asset.to_response() for asset in remaining])
