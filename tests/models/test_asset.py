"""
에셋 모델(Chart / Insight / Audience) 단위 테스트

- 공통 접근자(get_id, kind, description, favorite) 동작
- camelCase 직렬화 및 "type" 판별자 포함
- id 불변성
"""

import uuid
import pytest
from pydantic import ValidationError

from app.models.asset import ASSET_MODELS, NIL_UUID, AssetKind, Audience, Chart, Gender, Insight
from app.models.user import User


def test_defaults_use_nil_id():
    """id를 생략하면 nil UUID로 채워져야 한다."""
    insight = Insight(text="hello")
    assert insight.get_id() == NIL_UUID
    assert insight.description == ""
    assert insight.is_favorite() is False


def test_kind_tag_per_variant():
    assert Chart().kind == AssetKind.CHART.value
    assert Insight().kind == AssetKind.INSIGHT.value
    assert Audience().kind == AssetKind.AUDIENCE.value


def test_asset_models_cover_every_kind():
    assert set(ASSET_MODELS) == set(AssetKind)


def test_common_setters():
    chart = Chart(title="Sales")
    chart.set_description("quarterly")
    chart.set_favorite(True)

    assert chart.get_description() == "quarterly"
    assert chart.is_favorite() is True


def test_id_is_immutable():
    """생성 후 id 변경 시도는 실패해야 한다."""
    chart = Chart(id=uuid.uuid4())
    with pytest.raises(ValidationError):
        chart.id = uuid.uuid4()


def test_to_response_uses_camel_case_and_type():
    asset_id = uuid.uuid4()
    chart = Chart(id=asset_id, title="T", x_axis_title="X", y_axis_title="Y", data=[1.5, 2.0])

    body = chart.to_response()

    assert body["id"] == str(asset_id)
    assert body["type"] == "chart"
    assert body["xAxisTitle"] == "X"
    assert body["yAxisTitle"] == "Y"
    assert body["data"] == [1.5, 2.0]
    assert "x_axis_title" not in body


def test_accepts_camel_and_snake_case_input():
    camel = Audience.model_validate({"birthCountry": "KR", "socialHours": 3})
    snake = Audience.model_validate({"birth_country": "KR", "social_hours": 3})

    assert camel.birth_country == snake.birth_country == "KR"
    assert camel.social_hours == snake.social_hours == 3

    pascal = Audience.model_validate({"BirthCountry": "KR", "SocialHours": 3})
    assert pascal.birth_country == "KR"
    assert pascal.social_hours == 3


def test_audience_gender_enum():
    audience = Audience.model_validate({"gender": "Female"})
    assert audience.gender == Gender.FEMALE

    with pytest.raises(ValidationError):
        Audience.model_validate({"gender": "Unknown"})


def test_audience_without_gender_serializes_empty_string():
    audience = Audience()

    assert audience.gender == ""
    assert audience.to_response()["gender"] == ""
    assert Audience.model_validate({"gender": ""}).gender == ""
    assert Audience(gender="Male").to_response()["gender"] == "Male"


def test_user_find_asset_returns_first_match():
    """중복 id가 있으면 삽입 순서상 첫 번째 에셋을 반환해야 한다."""
    shared = uuid.uuid4()
    first = Insight(id=shared, text="first")
    second = Insight(id=shared, text="second")
    user = User(id=uuid.uuid4(), favourites=[first, second])

    assert user.find_asset(shared).text == "first"
    assert user.find_asset(uuid.uuid4()) is None
