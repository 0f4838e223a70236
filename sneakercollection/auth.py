"""JWT 토큰 발급과 검증."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from sneakercollection.core import ConfigError, UnauthorizedError


class JwtTokenIssuer:
    """서명된 JWT 토큰을 발급하고 검증합니다.

    서명 키는 생성할 때 명시적으로 전달받습니다.
    """

    def __init__(
        self,
        secret_key: str,
        expires_in: timedelta = timedelta(days=1),
        algorithm: str = "HS512",
    ):
        if not secret_key:
            raise ConfigError("jwt_secret_key is missing from the configuration.")
        self._secret_key = secret_key
        self.expires_in = expires_in
        self.algorithm = algorithm

    def issue(self, subject: str) -> str:
        """``subject`` 를 ``sub`` 클레임으로 갖는 토큰을 발급합니다."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": subject,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """토큰을 검증하고 payload 를 리턴합니다.

        Raises:
            UnauthorizedError: 만료되었거나 서명이 맞지 않거나 형식이 잘못된 경우.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "sub"]},
            )
        except ExpiredSignatureError as e:
            raise UnauthorizedError("Token has expired") from e
        except InvalidTokenError as e:
            raise UnauthorizedError(f"Invalid token: {e}") from e

        return payload
