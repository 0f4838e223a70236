# pylint: disable=redefined-outer-name, protected-access
"""pytest 에서 사용될 전역 Fixture들을 정의합니다."""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from sneakercollection.api import app, init_app
from sneakercollection.config import Config
from sneakercollection.orm import SessionMaker, init_engine, metadata
from sneakercollection.repo import SneakerRepository, UserRepository
from tests import random_email

TEST_SECRET_KEY = "sneakercollection-test-secret-" + "0123456789abcdef" * 4
"""HS512 서명에 충분한 길이의 테스트용 키."""


def memory_sessionmaker() -> SessionMaker:
    """테이블이 생성된 In-memory SQLite DB 의 Session 팩토리를 만듭니다."""
    engine = init_engine(
        metadata,
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return sessionmaker(engine)


@pytest.fixture
def get_session() -> SessionMaker:
    """:class:`.Session` 팩토리 메소드(:class:`~sneakercollection.orm.SessionMaker`)
    를 리턴하는 픽스쳐 입니다.

    호출시마다 비어있는 새 In-memory DB 를 만듭니다.
    """
    return memory_sessionmaker()


@pytest.fixture
def user_repo(get_session: SessionMaker) -> UserRepository:
    return UserRepository(get_session)


@pytest.fixture
def sneaker_repo(get_session: SessionMaker) -> SneakerRepository:
    return SneakerRepository(get_session)


@pytest.fixture
def config() -> Config:
    return Config(db_url="sqlite://", jwt_secret_key=TEST_SECRET_KEY)


@pytest.fixture
def client(config: Config, get_session: SessionMaker) -> TestClient:
    init_app(config, get_session)
    return TestClient(app)


@pytest.fixture
def credentials(client: TestClient) -> dict[str, str]:
    """``POST /api/User`` 로 가입한 사용자의 이메일/비밀번호."""
    data = {"email": random_email(), "password": "SecurePass123!"}
    r = client.post("/api/User", json=data)
    assert r.status_code == 201
    return data


@pytest.fixture
def auth_headers(client: TestClient, credentials: dict[str, str]) -> dict[str, str]:
    """인증 토큰이 담긴 ``Authorization`` 헤더."""
    r = client.post("/api/Authentication", json=credentials)
    assert r.status_code == 200
    return {"Authorization": f"Bearer {r.json()['data']}"}
