"""인증 서비스."""
from __future__ import annotations

from sneakercollection.auth import JwtTokenIssuer
from sneakercollection.core import AbstractRepository, UnauthorizedError
from sneakercollection.domain import User
from sneakercollection.logging import get_logger
from sneakercollection.schema import UserLoginSchema

logger = get_logger("sneakercollection.services.auth")


class AuthenticationService:
    """이메일/비밀번호를 확인하고 JWT 토큰을 발급합니다."""

    def __init__(self, users: AbstractRepository[User], token_issuer: JwtTokenIssuer):
        self.users = users
        self.token_issuer = token_issuer

    def authenticate_user(self, dto: UserLoginSchema) -> bool:
        user = self.users.get(by_email=dto.email)
        if user is None:
            logger.info("authentication failed: unknown email %r", dto.email)
            return False
        if user.password != dto.password:
            logger.info("authentication failed: wrong password for %r", dto.email)
            return False
        return True

    def generate_token(self, dto: UserLoginSchema) -> str:
        """``dto.email`` 을 subject 로 하는 토큰을 발급합니다.

        인증 여부는 확인하지 않으므로 :meth:`authenticate_user` 를 먼저
        호출해야 합니다.
        """
        return self.token_issuer.issue(dto.email)

    def verify_token(self, token: str) -> str:
        """토큰을 검증하고 subject(이메일)를 리턴합니다.

        Raises:
            UnauthorizedError: 토큰이 유효하지 않을 때.
        """
        payload = self.token_issuer.verify(token)
        subject = payload.get("sub")
        if not subject:
            raise UnauthorizedError("Invalid token: missing subject")
        return subject
