"""FastAPI 로 구현된 엔드포인트 테스트입니다."""
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from sneakercollection.api import VALIDATION_MESSAGE, app
from sneakercollection.services import AuthenticationService
from tests import random_email, random_sneaker_name


def sneaker_json(user_id: int, **kwargs) -> dict:
    data = {
        "name": random_sneaker_name(),
        "brand": "Nike",
        "price": 120.5,
        "sizeUS": 9.5,
        "year": 2021,
        "rate": 5,
        "userId": user_id,
    }
    data.update(kwargs)
    return data


def post_to_add_user(client: TestClient, email: str, password: str = "pw") -> dict:
    """서비스 엔드포인트 `POST /api/User` 를 통해 사용자를 추가합니다."""
    r = client.post("/api/User", json={"email": email, "password": password})
    assert r.status_code == 201
    return r.json()["data"]


def post_to_add_sneaker(client: TestClient, headers: dict, user_id: int, **kwargs) -> dict:
    r = client.post("/api/Sneaker", json=sneaker_json(user_id, **kwargs), headers=headers)
    assert r.status_code == 201
    return r.json()["data"]


def test_ping(client: TestClient):
    r = client.get("/ping")
    assert r.status_code == 200
    assert r.json() == {"ping": "pong"}


def test_add_user_returns_201_without_password(client: TestClient):
    email = random_email()
    r = client.post("/api/User", json={"email": email, "password": "SecurePass123!"})

    assert r.status_code == 201
    body = r.json()
    assert body["statusCode"] == 201
    assert body["message"] == "Success"
    assert body["data"]["id"] > 0
    assert body["data"]["email"] == email
    assert body["data"]["creationDate"]
    assert "password" not in body["data"]


def test_authentication_returns_token(client: TestClient, credentials: dict):
    r = client.post("/api/Authentication", json=credentials)
    assert r.status_code == 200
    assert r.json()["statusCode"] == 200
    assert isinstance(r.json()["data"], str)


def test_wrong_password_returns_401_and_never_generates_token(
    client: TestClient, credentials: dict
):
    with patch.object(AuthenticationService, "generate_token") as generate_token:
        r = client.post(
            "/api/Authentication",
            json={"email": credentials["email"], "password": "wrong"},
        )

    assert r.status_code == 401
    assert r.json()["statusCode"] == 401
    assert r.json()["data"] is None
    assert generate_token.call_count == 0


def test_unknown_email_returns_401(client: TestClient):
    r = client.post(
        "/api/Authentication", json={"email": random_email(), "password": "pw"}
    )
    assert r.status_code == 401


@pytest.mark.parametrize(
    "method, url",
    [
        ("GET", "/api/User"),
        ("GET", "/api/User/1"),
        ("GET", "/api/User/GetByEmail?email=a@example.com"),
        ("DELETE", "/api/User/1"),
        ("GET", "/api/Sneaker"),
        ("GET", "/api/Sneaker/1"),
        ("GET", "/api/Sneaker/GetByUserId?userId=1"),
        ("DELETE", "/api/Sneaker/1"),
    ],
)
def test_protected_routes_require_token(client: TestClient, method: str, url: str):
    r = client.request(method, url)
    assert r.status_code == 401
    assert r.json()["statusCode"] == 401

    r = client.request(method, url, headers={"Authorization": "Bearer not-a-token"})
    assert r.status_code == 401
    assert r.json()["message"].startswith("Invalid token")


def test_unknown_user_id_returns_404_envelope(client: TestClient, auth_headers: dict):
    r = client.get("/api/User/987654", headers=auth_headers)

    assert r.status_code == 404
    body = r.json()
    assert body["statusCode"] == 404
    assert "987654" in body["message"]
    assert body["data"] is None


def test_get_users(client: TestClient, auth_headers: dict, credentials: dict):
    other = post_to_add_user(client, random_email())

    r = client.get("/api/User", params={"sortBy": "id", "descending": "false"}, headers=auth_headers)
    assert r.status_code == 200
    assert [u["email"] for u in r.json()["data"]] == [credentials["email"], other["email"]]

    r = client.get("/api/User/GetByEmail", params={"email": other["email"]}, headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["data"]["id"] == other["id"]


def test_mixed_case_email_can_be_found_as_registered(client: TestClient):
    email = random_email("Foo").replace("example.com", "Example.COM")
    user = post_to_add_user(client, email, "SecurePass123!")
    assert user["email"] == email

    r = client.post("/api/Authentication", json={"email": email, "password": "SecurePass123!"})
    assert r.status_code == 200
    headers = {"Authorization": f"Bearer {r.json()['data']}"}

    r = client.get("/api/User/GetByEmail", params={"email": email}, headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["id"] == user["id"]

    post_to_add_sneaker(client, headers, user["id"])
    r = client.get("/api/Sneaker/GetByUserEmail", params={"email": email}, headers=headers)
    assert r.status_code == 200
    assert len(r.json()["data"]) == 1


def test_duplicate_email_returns_500_without_sql(client: TestClient, credentials: dict):
    r = client.post("/api/User", json=credentials)

    assert r.status_code == 500
    body = r.json()
    assert body["statusCode"] == 500
    assert "UNIQUE constraint failed" in body["message"]
    assert "[SQL:" not in body["message"]
    assert credentials["password"] not in body["message"]


def test_deleting_user_who_owns_sneakers_returns_500(client: TestClient, auth_headers: dict):
    user = post_to_add_user(client, random_email())
    sneaker = post_to_add_sneaker(client, auth_headers, user["id"])

    r = client.delete(f"/api/User/{user['id']}", headers=auth_headers)
    assert r.status_code == 500
    assert r.json()["message"] == "FOREIGN KEY constraint failed"

    r = client.get(f"/api/Sneaker/{sneaker['id']}", headers=auth_headers)
    assert r.status_code == 200


def test_update_user(client: TestClient, auth_headers: dict):
    user = post_to_add_user(client, random_email())
    new_email = random_email("updated")

    r = client.patch(
        "/api/User",
        json={"id": user["id"], "email": new_email, "password": "changed"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["data"]["email"] == new_email

    r = client.patch(
        "/api/User",
        json={"id": 987654, "email": new_email, "password": "changed"},
        headers=auth_headers,
    )
    assert r.status_code == 404


def test_empty_sneaker_listing_returns_404(client: TestClient, auth_headers: dict):
    r = client.get("/api/Sneaker", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["message"] == "No Sneakers were found"


def test_sneaker_listing_sorted_by_year(client: TestClient, auth_headers: dict):
    user = post_to_add_user(client, random_email())
    for year in [2019, 2023, 2021]:
        post_to_add_sneaker(client, auth_headers, user["id"], year=year)

    r = client.get("/api/Sneaker", headers=auth_headers)
    assert r.status_code == 200
    assert [s["year"] for s in r.json()["data"]] == [2023, 2021, 2019]

    r = client.get("/api/Sneaker", params={"pageSize": 2, "page": 2}, headers=auth_headers)
    assert [s["year"] for s in r.json()["data"]] == [2019]


def test_add_sneaker_for_unknown_user_returns_404(client: TestClient, auth_headers: dict):
    r = client.post("/api/Sneaker", json=sneaker_json(987654), headers=auth_headers)
    assert r.status_code == 404
    assert "987654" in r.json()["message"]


def test_update_sneaker(client: TestClient, auth_headers: dict):
    user = post_to_add_user(client, random_email())
    sneaker = post_to_add_sneaker(client, auth_headers, user["id"])

    data = sneaker_json(user["id"], id=sneaker["id"], name="Air Max 95", rate=None)
    del data["userId"]
    r = client.patch("/api/Sneaker", json=data, headers=auth_headers)

    assert r.status_code == 200
    updated = r.json()["data"]
    assert updated["name"] == "Air Max 95"
    assert updated["rate"] is None
    assert updated["userId"] == user["id"]


def test_validation_errors_return_400_with_details(client: TestClient, auth_headers: dict):
    user = post_to_add_user(client, random_email())

    r = client.post(
        "/api/Sneaker",
        json=sneaker_json(user["id"], rate=9, price=-1),
        headers=auth_headers,
    )
    assert r.status_code == 400
    body = r.json()
    assert body["statusCode"] == 400
    assert body["message"] == VALIDATION_MESSAGE
    assert body["data"] is None
    assert set(body["details"]) == {"rate", "price"}
    assert all(isinstance(msgs, list) and msgs for msgs in body["details"].values())


def test_invalid_query_parameters_return_400(client: TestClient, auth_headers: dict):
    r = client.get("/api/User", params={"page": 0}, headers=auth_headers)
    assert r.status_code == 400
    assert "page" in r.json()["details"]

    r = client.get("/api/User/not-a-number", headers=auth_headers)
    assert r.status_code == 400
    assert "id" in r.json()["details"]


def test_invalid_email_on_sign_up_returns_400(client: TestClient):
    r = client.post("/api/User", json={"email": "not-an-email", "password": "pw"})
    assert r.status_code == 400
    assert "email" in r.json()["details"]


def test_happy_path_scenario(client: TestClient):
    """가입, 로그인, 스니커즈 추가/조회, 삭제까지의 전체 시나리오."""
    email, password = random_email(), "SecurePass123!"

    r = client.post("/api/User", json={"email": email, "password": password})
    assert r.status_code == 201
    user_id = r.json()["data"]["id"]

    r = client.post("/api/Authentication", json={"email": email, "password": password})
    assert r.status_code == 200
    headers = {"Authorization": f"Bearer {r.json()['data']}"}

    r = client.post("/api/Sneaker", json=sneaker_json(user_id), headers=headers)
    assert r.status_code == 201
    sneaker_id = r.json()["data"]["id"]

    r = client.get("/api/Sneaker/GetByUserId", params={"userId": user_id}, headers=headers)
    assert r.status_code == 200
    assert [s["id"] for s in r.json()["data"]] == [sneaker_id]

    r = client.get("/api/Sneaker/GetByUserEmail", params={"email": email}, headers=headers)
    assert r.status_code == 200
    assert len(r.json()["data"]) == 1

    r = client.get(f"/api/Sneaker/{sneaker_id}", headers=headers)
    assert r.status_code == 200
    assert r.json()["data"]["sizeUS"] == 9.5

    r = client.delete(f"/api/Sneaker/{sneaker_id}", headers=headers)
    assert r.status_code == 204
    assert r.content == b""

    r = client.delete(f"/api/Sneaker/{sneaker_id}", headers=headers)
    assert r.status_code == 204

    r = client.get("/api/Sneaker/GetByUserId", params={"userId": user_id}, headers=headers)
    assert r.status_code == 404

    r = client.delete(f"/api/User/{user_id}", headers=headers)
    assert r.status_code == 204


def test_routes_are_installed(client: TestClient):
    paths = {getattr(route, "path", "") for route in app.routes}
    assert {
        "/ping",
        "/api/Authentication",
        "/api/User",
        "/api/User/{id}",
        "/api/User/GetByEmail",
        "/api/Sneaker",
        "/api/Sneaker/{id}",
        "/api/Sneaker/GetByUserId",
        "/api/Sneaker/GetByUserEmail",
    } <= paths
