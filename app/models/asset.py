"""
즐겨찾기 에셋 모델 (Chart / Insight / Audience)

세 종류의 에셋을 하나의 닫힌 Tagged Union으로 표현합니다.
모든 에셋은 AssetBase의 공통 필드(id, description, favorite)와
kind 판별자(직렬화 시 "type")를 가지며, 종류별 필드만 하위 모델에 정의합니다.

Rationale:
    - 종류별 분기는 kind 값으로만 수행하고, id/description/favorite 접근은
      AssetBase의 공통 메서드로 통일합니다.
    - 프론트엔드와의 호환을 위해 camelCase로 직렬화하되,
      입력은 camelCase, PascalCase(Title, XAxisTitle 등 기존 클라이언트 포맷),
      snake_case를 모두 허용합니다.
    - Audience.gender는 미지정 시 빈 문자열("")로 직렬화합니다.
"""

import uuid
from enum import Enum
from typing import List, Literal, Union

from pydantic import AliasChoices, AliasGenerator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel, to_pascal

NIL_UUID = uuid.UUID(int=0)


class AssetKind(str, Enum):
    CHART = "chart"
    INSIGHT = "insight"
    AUDIENCE = "audience"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"


def _input_aliases(name: str) -> AliasChoices:
    """camelCase / PascalCase / snake_case 입력 키 허용 (id는 "ID"도 허용)"""
    choices = [to_camel(name), to_pascal(name), name]
    if name == "id":
        choices.append("ID")
    return AliasChoices(*choices)


class AssetBase(BaseModel):
    """모든 에셋의 공통 필드 및 접근자"""
    model_config = ConfigDict(
        alias_generator=AliasGenerator(
            validation_alias=_input_aliases,
            serialization_alias=to_camel,
        ),
        populate_by_name=True,
        validate_assignment=True,
    )

    # Rationale: id는 생성 이후 변경 불가. 신규 id 부여는 model_copy로 새 인스턴스를 만들어 처리합니다.
    id: uuid.UUID = Field(default=NIL_UUID, frozen=True)
    description: str = ""
    favorite: bool = False

    def get_id(self) -> uuid.UUID:
        return self.id

    def get_description(self) -> str:
        return self.description

    def set_description(self, description: str) -> None:
        self.description = description

    def is_favorite(self) -> bool:
        return self.favorite

    def set_favorite(self, favorite: bool) -> None:
        self.favorite = favorite

    def to_response(self) -> dict:
        """API 응답용 dict (camelCase, "type" 판별자 포함)"""
        return self.model_dump(mode="json", by_alias=True)


class Chart(AssetBase):
    kind: Literal["chart"] = Field(default="chart", alias="type")
    title: str = ""
    x_axis_title: str = ""
    y_axis_title: str = ""
    data: List[float] = Field(default_factory=list)


class Insight(AssetBase):
    kind: Literal["insight"] = Field(default="insight", alias="type")
    text: str = ""


class Audience(AssetBase):
    kind: Literal["audience"] = Field(default="audience", alias="type")
    gender: Union[Gender, Literal[""]] = ""
    birth_country: str = ""
    age_group: str = ""
    social_hours: int = 0
    purchases: int = 0


Asset = Union[Chart, Insight, Audience]

# kind 판별자 -> 구체 모델 매핑 (Add 시 payload 파싱 대상 선택)
ASSET_MODELS: dict[AssetKind, type[AssetBase]] = {
    AssetKind.CHART: Chart,
    AssetKind.INSIGHT: Insight,
    AssetKind.AUDIENCE: Audience,
}
