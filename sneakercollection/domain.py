"""도메인 모델."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class User:
    """스니커즈 컬렉션을 소유하는 사용자입니다."""

    email: str

    password: str = field(metadata={"min_length": 1})
    """간단히 하기 위해 평문으로 저장합니다. 실제 서비스라면 해시값을 저장해야 합니다."""

    id: Optional[int] = None  # pylint: disable=invalid-name
    """매핑된 DB가 할당한 고유 ID. 저장된 후에만 값이 부여됩니다."""

    creation_date: Optional[datetime] = None
    """DB가 할당한 생성 시각. 생성 후에는 바뀌지 않습니다."""


@dataclass
class Sneaker:
    """사용자(:class:`User`)가 소유한 스니커즈 한 켤레."""

    name: str = field(metadata={"min_length": 1, "max_length": 255})
    brand: str = field(metadata={"min_length": 1, "max_length": 255})
    price: Decimal = field(metadata={"ge": 0})
    size_us: float = field(metadata={"alias": "sizeUS"})
    year: int = field(metadata={"ge": 1, "le": 9999})

    user_id: int = field(metadata={"ge": 1})
    """:attr:`User.id` 를 가리키는 외래키."""

    rate: Optional[int] = field(default=None, metadata={"ge": 1, "le": 5})
    id: Optional[int] = None  # pylint: disable=invalid-name
    creation_date: Optional[datetime] = None
