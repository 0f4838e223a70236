"""FastAPI 로 구현한 RESTful 서비스 앱."""
from __future__ import annotations

from datetime import timedelta
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from sneakercollection.auth import JwtTokenIssuer
from sneakercollection.config import Config
from sneakercollection.core import ApiError, BadRequestError, UnauthorizedError
from sneakercollection.logging import get_logger
from sneakercollection.orm import SessionMaker, init_db
from sneakercollection.repo import SneakerRepository, UserRepository
from sneakercollection.schema import ApiResponse
from sneakercollection.services import (
    AuthenticationService,
    SneakerService,
    UserService,
    error_message,
)

SUCCESS_MESSAGE = "Success"
VALIDATION_MESSAGE = "One or more validation errors occurred."

logger = get_logger("sneakercollection.api")

# globals
app: FastAPI = FastAPI(title=Config.title)

bearer_scheme = HTTPBearer(auto_error=False)


def init_app(
    config: Optional[Config] = None, get_session: Optional[SessionMaker] = None
) -> FastAPI:
    """FastAPI 앱을 초기화 합니다.

    설정을 읽어 DB와 서비스 객체들을 만들고 ``app.state`` 에 저장한 뒤,
    :mod:`sneakercollection.routes` 모듈에 정의된 엔드포인트를 로드합니다.

    Args:
        config: 앱 설정. 없으면 :meth:`Config.load_from_config` 로 읽습니다.
        get_session: Session 팩토리. 없으면 :func:`init_db` 로 만듭니다.
    """
    config = config or Config.load_from_config()
    get_session = get_session or init_db(config)

    users = UserRepository(get_session)
    sneakers = SneakerRepository(get_session)
    token_issuer = JwtTokenIssuer(
        config.jwt_secret_key,
        expires_in=timedelta(minutes=config.token_expire_minutes),
    )

    app.title = config.title
    app.state.config = config
    app.state.user_service = UserService(users)
    app.state.sneaker_service = SneakerService(sneakers, users)
    app.state.auth_service = AuthenticationService(users, token_issuer)

    from sneakercollection.routes import auth, sneaker, user  # noqa

    logger.info("app initialized: %s", config.title)
    return app


def respond(
    data: Any = None, status_code: int = 200, message: Optional[str] = SUCCESS_MESSAGE
) -> JSONResponse:
    """``{statusCode, message, data, details}`` 형식의 응답을 만듭니다."""
    body = ApiResponse(
        status_code=status_code, message=message, data=jsonable_encoder(data)
    )
    return JSONResponse(body.model_dump(by_alias=True), status_code=status_code)


def no_content() -> Response:
    """본문 없는 ``204 No Content`` 응답."""
    return Response(status_code=204)


# 의존성 주입


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


def get_sneaker_service(request: Request) -> SneakerService:
    return request.app.state.sneaker_service


def get_auth_service(request: Request) -> AuthenticationService:
    return request.app.state.auth_service


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthenticationService = Depends(get_auth_service),
) -> str:
    """``Authorization: Bearer <token>`` 헤더를 검증하고 사용자 이메일을 리턴합니다."""
    if credentials is None:
        raise UnauthorizedError("Authorization header is missing or invalid")
    return auth.verify_token(credentials.credentials)


# 에러 핸들러


@app.exception_handler(ApiError)
def handle_api_error(request: Request, e: ApiError) -> JSONResponse:
    return respond(status_code=e.status_code, message=e.message)


@app.exception_handler(RequestValidationError)
def handle_validation_error(request: Request, e: RequestValidationError) -> JSONResponse:
    """요청 검증 에러를 ``{필드: [메세지...]}`` 형식의 ``details`` 로 변환합니다."""
    details: dict[str, list[str]] = {}
    for error in e.errors():
        loc = [str(it) for it in error.get("loc", ())]
        # 첫번째 항목은 body, query, path 같은 위치 정보입니다.
        field = ".".join(loc[1:]) or ".".join(loc)
        details.setdefault(field, []).append(error.get("msg", ""))

    status_code = BadRequestError.status_code
    body = ApiResponse(status_code=status_code, message=VALIDATION_MESSAGE, details=details)
    return JSONResponse(body.model_dump(by_alias=True), status_code=status_code)


@app.exception_handler(Exception)
def handle_unexpected_error(request: Request, e: Exception) -> JSONResponse:
    logger.exception("unhandled error: %s %s", request.method, request.url.path)
    cause = e.__cause__ or e
    message = error_message(cause) or type(cause).__name__
    return respond(status_code=500, message=message)


@app.get("/ping")
def ping() -> dict[str, str]:
    """헬스 체크."""
    return {"ping": "pong"}
