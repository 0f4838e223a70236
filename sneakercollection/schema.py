"""스키마 변환, 검증 조작등의 기능을 담당하는 모듈입니다.

도메인 ``dataclass`` 를 HTTP 경계에서 사용할 Pydantic 모델(DTO)로 변환합니다.
"""
from __future__ import annotations

from dataclasses import MISSING, fields, is_dataclass
from typing import Annotated, Any, Callable, Optional, Type, TypeVar, get_type_hints

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, create_model
from pydantic.alias_generators import to_camel
from pydantic.fields import FieldInfo
from pydantic.networks import validate_email

from sneakercollection.domain import Sneaker, User

D = TypeVar("D")
T = TypeVar("T")

SCHEMAS = dict[Type, Type[BaseModel]]()


def check_email(value: str) -> str:
    """이메일 형식만 검사하고 값은 입력한 그대로 둡니다.

    ``EmailStr`` 와 달리 도메인을 소문자로 바꾸지 않습니다. 저장된 이메일은
    가입할 때 입력한 문자열과 같아야 합니다.
    """
    _, email = validate_email(value)
    if email.lower() != value.lower():
        raise ValueError("value is not a valid email address")
    return value


Email = Annotated[str, AfterValidator(check_email)]


class ModelSchema(BaseModel):
    """모든 스키마의 기본 클래스.

    JSON 으로는 camelCase 이름을 사용하며, 입력은 snake_case 이름도 허용합니다.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )


def schema_from(
    DataClass: Type[D],
    excludes: Optional[list[str]] = None,
) -> Callable[[Type[T]], Type[BaseModel]]:
    """`dataclasses.dataclass` 모델을 Pydantic `BaseModel` 로 변환합니다.

    - dataclass 필드의 ``metadata`` 는 :func:`pydantic.Field` 인자로 사용됩니다.
    - 데코레이트된 클래스에 선언한 타입이나 ``Field(...)`` 가 dataclass 의 정의보다
      우선합니다. dataclass 에 없는 필드를 추가로 선언할 수도 있습니다.
    """
    assert is_dataclass(DataClass)
    hints = get_type_hints(DataClass, include_extras=True)

    def _wrapper(TargetClass: Type[T]) -> Type[BaseModel]:
        # 타겟 클래스의 필드 속성을 가져옵니다.
        target_hints = get_type_hints(TargetClass, include_extras=True)
        members = {
            name: value
            for name, value in vars(TargetClass).items()
            if not name.startswith("_")
        }

        definitions: dict[str, Any] = {}
        for field in fields(DataClass):
            if excludes and field.name in excludes:
                continue
            type_ = target_hints.get(field.name, hints[field.name])
            if isinstance(members.get(field.name), FieldInfo):
                definitions[field.name] = (type_, members[field.name])
                continue
            default = field.default if field.default is not MISSING else ...
            definitions[field.name] = (type_, Field(default, **field.metadata))

        for name, type_ in target_hints.items():
            if name not in definitions:
                definitions[name] = (type_, members.get(name, ...))

        model = create_model(  # type: ignore
            TargetClass.__name__,
            __base__=ModelSchema,
            __module__=TargetClass.__module__,
            __doc__=TargetClass.__doc__,
            **definitions,
        )
        SCHEMAS[TargetClass] = model
        return model

    return _wrapper


@schema_from(User, excludes=["id", "creation_date"])
class UserLoginSchema:
    """로그인과 사용자 생성에 사용하는 스키마.

    비밀번호는 간단히 하기 위해 평문으로 다룹니다.
    """

    email: Email


@schema_from(User, excludes=["creation_date"])
class UserUpdateSchema:
    """사용자 수정 스키마. ``id`` 를 제외한 모든 필드를 교체합니다."""

    id: int = Field(..., ge=1)
    email: Email


@schema_from(User, excludes=["password"])
class UserSchema:
    """응답용 사용자 스키마. 비밀번호는 돌려주지 않습니다."""


@schema_from(Sneaker, excludes=["id", "creation_date"])
class SneakerCreateSchema:
    """스니커즈 생성 스키마. ``userId`` 는 존재하는 사용자여야 합니다."""


@schema_from(Sneaker, excludes=["creation_date", "user_id"])
class SneakerUpdateSchema:
    """스니커즈 수정 스키마. 소유자(``userId``)는 바꿀 수 없습니다."""

    id: int = Field(..., ge=1)


@schema_from(Sneaker)
class SneakerSchema:
    """응답용 스니커즈 스키마."""

    price: float


class ApiResponse(BaseModel):
    """모든 HTTP 응답을 감싸는 공통 형식."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    status_code: int
    message: Optional[str] = None
    data: Any = None
    details: Optional[dict[str, list[str]]] = None
