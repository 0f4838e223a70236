class SneakerCollectionError(Exception):
    """``SneakerCollection`` 와 관련된 모든 에러의 기본 클래스."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    ...


class ConfigError(SneakerCollectionError):
    """설정 값이 누락되었거나 잘못되었을 때 발생하는 에러."""

    ...


class ApiError(SneakerCollectionError):
    """HTTP 상태 코드로 변환되는 에러의 기본 클래스."""

    status_code: int = 500


class NotFoundError(ApiError):
    """요청한 리소스가 존재하지 않을 때 발생하는 에러."""

    status_code = 404


class BadRequestError(ApiError):
    """요청 값이 유효하지 않을 때 발생하는 에러."""

    status_code = 400


class UnauthorizedError(ApiError):
    """인증에 실패했거나 토큰이 유효하지 않을 때 발생하는 에러."""

    status_code = 401


class CommonError(ApiError):
    """예상하지 못한 실패를 감싸는 에러. 원래 에러의 메세지를 그대로 전달합니다."""

    status_code = 500
