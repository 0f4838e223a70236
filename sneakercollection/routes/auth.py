"""인증 엔드포인트."""
from __future__ import annotations

from fastapi import Depends

from sneakercollection.api import app, get_auth_service, respond
from sneakercollection.core import UnauthorizedError
from sneakercollection.schema import UserLoginSchema
from sneakercollection.services import AuthenticationService


@app.post("/api/Authentication")
def get_auth_token(
    dto: UserLoginSchema, auth: AuthenticationService = Depends(get_auth_service)
):
    """``POST /api/Authentication`` 이메일/비밀번호를 확인하고 토큰을 발급합니다.

    인증 없이 호출할 수 있습니다.
    """
    if not auth.authenticate_user(dto):
        raise UnauthorizedError("Invalid email or password")
    return respond(auth.generate_token(dto))
