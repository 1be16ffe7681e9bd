import uuid
import pytest
from app.core.security import create_access_token


@pytest.fixture
def chart_body():
    return {
        "type": "chart",
        "asset": {
            "title": "Test Chart",
            "xAxisTitle": "Month",
            "yAxisTitle": "Sales",
            "data": [1.0, 2.5, 4.0],
            "description": "Chart Desc",
        },
        "favorite": True,
    }


def _add(client, headers, kind="insight", favorite=True, **asset):
    response = client.post(
        "/favourites/add",
        headers=headers,
        json={"type": kind, "asset": asset, "favorite": favorite},
    )
    assert response.status_code == 201
    return response.json()["result"]


# --------------------------------------------------------------------------
# 인증
# --------------------------------------------------------------------------

@pytest.mark.parametrize("invalid_headers", [
    {},                                           # 헤더 누락
    {"Authorization": ""},                        # 빈 헤더
    {"Authorization": "Basic abc"},               # 잘못된 스킴
    {"Authorization": "Bearer not-a-jwt"},        # 잘못된 토큰
])
def test_unauthorized(client, invalid_headers):
    """인증 정보가 없거나 잘못되면 401을 반환해야 한다."""
    response = client.get("/favourites", headers=invalid_headers)

    assert response.status_code == 401
    data = response.json()
    assert data["isSuccess"] is False
    assert data["code"] == "AUTH-001"


def test_unknown_user_is_not_found(client):
    """토큰은 유효하지만 프로비저닝되지 않은 사용자는 404"""
    headers = {"Authorization": f"Bearer {create_access_token(uuid.uuid4())}"}

    response = client.get("/favourites", headers=headers)

    assert response.status_code == 404
    assert response.json()["code"] == "FAV-001"


# --------------------------------------------------------------------------
# POST /favourites/add
# --------------------------------------------------------------------------

def test_add_chart(client, auth_headers, chart_body):
    """차트 추가 시 201과 생성된 에셋(camelCase)을 반환해야 한다."""
    response = client.post("/favourites/add", headers=auth_headers, json=chart_body)

    assert response.status_code == 201
    data = response.json()
    assert data["isSuccess"] is True
    result = data["result"]
    assert result["type"] == "chart"
    assert result["title"] == "Test Chart"
    assert result["xAxisTitle"] == "Month"
    assert result["description"] == "Chart Desc"
    assert result["favorite"] is True
    assert uuid.UUID(result["id"]) != uuid.UUID(int=0)


@pytest.mark.parametrize("favorite", [True, False])
def test_add_audience(client, auth_headers, favorite):
    result = _add(client, auth_headers, kind="audience", favorite=favorite,
                  description="Audience Desc", gender="Female", birthCountry="KR", socialHours=2)

    assert result["type"] == "audience"
    assert result["gender"] == "Female"
    assert result["birthCountry"] == "KR"
    assert result["favorite"] is favorite


def test_add_unknown_type(client, auth_headers):
    response = client.post(
        "/favourites/add", headers=auth_headers, json={"type": "video", "asset": {}, "favorite": True}
    )

    assert response.status_code == 400
    assert response.json()["code"] == "FAV-003"


def test_add_invalid_payload(client, auth_headers):
    response = client.post(
        "/favourites/add", headers=auth_headers,
        json={"type": "chart", "asset": {"data": "oops"}, "favorite": True},
    )

    assert response.status_code == 400
    data = response.json()
    assert data["code"] == "FAV-004"
    assert data["message"] == "Invalid chart asset"


def test_add_method_not_allowed(client, auth_headers):
    response = client.get("/favourites/add", headers=auth_headers)

    assert response.status_code == 405
    assert response.json()["isSuccess"] is False


# --------------------------------------------------------------------------
# GET /favourites
# --------------------------------------------------------------------------

def test_list_only_favourites(client, auth_headers):
    chart = _add(client, auth_headers, kind="chart", favorite=True, title="Chart1")
    _add(client, auth_headers, kind="insight", favorite=False, text="Insight1")

    response = client.get("/favourites", headers=auth_headers)

    assert response.status_code == 200
    result = response.json()["result"]
    assert [a["id"] for a in result] == [chart["id"]]
    assert result[0]["title"] == "Chart1"


def test_list_empty(client, auth_headers):
    response = client.get("/favourites", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["result"] == []


def test_list_pagination(client, auth_headers):
    added = [_add(client, auth_headers, text=f"i{i}") for i in range(5)]

    response = client.get("/favourites", headers=auth_headers, params={"limit": 2, "offset": 1})

    assert [a["id"] for a in response.json()["result"]] == [added[1]["id"], added[2]["id"]]


@pytest.mark.parametrize("params", [
    {"limit": "abc"},
    {"limit": "-3"},
    {"offset": "x"},
    {"offset": "-1"},
    {"limit": "0"},
])
def test_list_ignores_invalid_pagination(client, auth_headers, params):
    """숫자가 아니거나 음수인 limit/offset은 무시되어야 한다."""
    added = [_add(client, auth_headers, text=f"i{i}") for i in range(3)]

    response = client.get("/favourites", headers=auth_headers, params=params)

    assert response.status_code == 200
    assert len(response.json()["result"]) == len(added)


def test_list_offset_beyond_length(client, auth_headers):
    _add(client, auth_headers, text="only")

    response = client.get("/favourites", headers=auth_headers, params={"offset": 5})

    assert response.json()["result"] == []


def test_list_isolation(client, repo, auth_headers):
    """다른 사용자의 즐겨찾기는 조회되지 않아야 한다."""
    from app.models.user import User

    other_id = uuid.uuid4()
    repo.put(User(id=other_id))
    other_headers = {"Authorization": f"Bearer {create_access_token(other_id)}"}
    _add(client, other_headers, text="other")
    mine = _add(client, auth_headers, text="mine")

    result = client.get("/favourites", headers=auth_headers).json()["result"]

    assert [a["id"] for a in result] == [mine["id"]]


# --------------------------------------------------------------------------
# PUT /favourites/remove, PUT /favourites/edit
# --------------------------------------------------------------------------

def test_toggle_favorite(client, auth_headers):
    asset = _add(client, auth_headers, favorite=True, text="x")

    response = client.put(
        "/favourites/remove", headers=auth_headers, params={"asset_id": asset["id"]}, json={"favorite": False}
    )

    assert response.status_code == 200
    assert response.json()["result"]["favorite"] is False
    assert client.get("/favourites", headers=auth_headers).json()["result"] == []


def test_toggle_requires_put(client, auth_headers):
    asset = _add(client, auth_headers, text="x")

    response = client.post(
        "/favourites/remove", headers=auth_headers, params={"asset_id": asset["id"]}, json={"favorite": False}
    )

    assert response.status_code == 405


@pytest.mark.parametrize("path, body", [
    ("/favourites/remove", {"favorite": True}),
    ("/favourites/edit", {"description": "x"}),
])
def test_update_invalid_asset_id(client, auth_headers, path, body):
    response = client.put(path, headers=auth_headers, params={"asset_id": "not-a-uuid"}, json=body)

    assert response.status_code == 400
    assert response.json()["code"] == "FAV-005"


@pytest.mark.parametrize("path, body", [
    ("/favourites/remove", {"favorite": True}),
    ("/favourites/edit", {"description": "x"}),
])
def test_update_unknown_asset(client, auth_headers, path, body):
    response = client.put(path, headers=auth_headers, params={"asset_id": str(uuid.uuid4())}, json=body)

    assert response.status_code == 404
    assert response.json()["code"] == "FAV-002"


# --------------------------------------------------------------------------
# 잘못된 요청 본문 (JSON 아님 / 타입 불일치) -> 400
# --------------------------------------------------------------------------

def test_add_with_wrongly_typed_favorite(client, auth_headers):
    response = client.post(
        "/favourites/add",
        headers=auth_headers,
        json={"type": "chart", "asset": {}, "favorite": "notabool"},
    )

    assert response.status_code == 400
    data = response.json()
    assert data["isSuccess"] is False
    assert data["code"] == "COMMON-002"
    assert "body.favorite" in data["result"]
    # 실패한 요청은 컬렉션을 변경하지 않아야 한다.
    assert client.get("/favourites", headers=auth_headers).json()["result"] == []


@pytest.mark.parametrize("method, path", [
    ("post", "/favourites/add"),
    ("put", "/favourites/remove"),
    ("put", "/favourites/edit"),
])
def test_non_json_body_is_bad_request(client, auth_headers, method, path):
    asset = _add(client, auth_headers, text="x")

    response = client.request(
        method.upper(),
        path,
        headers={**auth_headers, "Content-Type": "application/json"},
        params={"asset_id": asset["id"]},
        content="not json",
    )

    assert response.status_code == 400
    assert response.json()["code"] == "COMMON-002"


def test_edit_description(client, auth_headers):
    asset = _add(client, auth_headers, text="x", description="old")

    response = client.put(
        "/favourites/edit", headers=auth_headers, params={"asset_id": asset["id"]}, json={"description": "new"}
    )

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["description"] == "new"
    assert result["id"] == asset["id"]


# --------------------------------------------------------------------------
# DELETE /favourites/delete
# --------------------------------------------------------------------------

def test_delete_returns_remaining(client, auth_headers):
    first = _add(client, auth_headers, text="a")
    second = _add(client, auth_headers, text="b", favorite=False)
    third = _add(client, auth_headers, text="c")

    response = client.delete("/favourites/delete", headers=auth_headers, params={"asset_id": first["id"]})

    assert response.status_code == 200
    assert [a["id"] for a in response.json()["result"]] == [second["id"], third["id"]]


def test_delete_unknown_asset(client, auth_headers):
    _add(client, auth_headers, text="a")

    response = client.delete("/favourites/delete", headers=auth_headers, params={"asset_id": str(uuid.uuid4())})

    assert response.status_code == 404
    assert len(client.get("/favourites", headers=auth_headers).json()["result"]) == 1


def test_delete_missing_asset_id(client, auth_headers):
    response = client.delete("/favourites/delete", headers=auth_headers)

    assert response.status_code == 400
