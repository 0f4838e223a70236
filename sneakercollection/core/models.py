from __future__ import annotations

import abc
from contextlib import ContextDecorator
from dataclasses import dataclass
from datetime import datetime
from typing import (
    Any,
    Generic,
    Iterable,
    List,
    Literal,
    Optional,
    Protocol,
    Type,
    TypeVar,
)

KEY_FIELDS = ("id", "creation_date")
"""저장소가 할당하는 필드. INSERT/UPDATE 컬럼 목록에서 항상 제외됩니다."""


class Entity(Protocol):
    """Entity 프로토콜 명세."""

    id: Optional[int]  # PK 컬럼으로 id 라는 필드를 제공해야 합니다.
    creation_date: Optional[datetime]


E = TypeVar("E", bound=Entity)


def _normalize(name: str) -> str:
    return name.replace("_", "").lower()


@dataclass
class QueryParameters:
    """페이지 단위 조회를 위한 파라메터.

    ``page`` 는 1부터 시작합니다.
    """

    page: int = 1
    page_size: int = 10
    sort_by: str = "id"
    descending: bool = True

    @property
    def offset(self) -> int:
        """0부터 시작하는 조회 시작 위치."""
        return (self.page - 1) * self.page_size

    def resolve_sort_column(
        self, columns: Iterable[str], default: Optional[str] = "id"
    ) -> Optional[str]:
        """``sort_by`` 에 해당하는 실제 컬럼 이름을 찾습니다.

        대소문자와 밑줄(``_``)을 무시하고 비교하므로 ``creationDate``,
        ``CreationDate``, ``creation_date`` 는 모두 ``creation_date`` 컬럼이
        됩니다. 일치하는 컬럼이 없으면 ``default`` 를 리턴합니다.
        """
        wanted = _normalize(self.sort_by or "")
        for column in columns:
            if _normalize(column) == wanted:
                return column
        return default


class AbstractRepository(Generic[E], abc.ABC, ContextDecorator):
    """Repository 패턴의 추상 인터페이스 입니다."""

    entity_class: Type[E]

    def __enter__(self) -> AbstractRepository[E]:
        """`module`:contextmanager`의 필수 인터페이스 구현."""
        return self

    def __exit__(
        self, typ: Any = None, value: Any = None, traceback: Any = None
    ) -> Literal[False]:
        self.close()
        return False

    def close(self) -> None:
        """레포지터리와 연결된 저장소 객체를 종료합니다."""
        return

    @abc.abstractmethod
    def add(self, item: E) -> E:
        """레포지터리에 :class:`E` 객체를 추가합니다.

        저장소가 할당한 ``id`` 와 ``creation_date`` 가 채워진 객체를 리턴합니다.
        """
        raise NotImplementedError

    def get(self, id: Optional[int] = None, **kwargs: Any) -> Optional[E]:
        """주어진 id 에 해당하는 :class:`E` 객체를 조회합니다.

        못 찾을 경우 ``None`` 을 리턴합니다.
        """
        if not kwargs:
            return self._get(id)

        # get(by_field=value) 처럼 이름있는 파라메터에 `by_` 가 붙어있는 경우
        # _get_by_field 메소드가 있다면 그 메소드로 라우팅 합니다.
        k, v = next(iter(kwargs.items()))
        if k.startswith("by_"):
            method = getattr(self, "_get_" + k, None)
            if method:
                return method(v)
            return self._get(**{k[3:]: v})
        return self._get(**kwargs)

    @abc.abstractmethod
    def _get(self, id: Optional[int] = None, **kwargs: Any) -> Optional[E]:
        raise NotImplementedError

    def find(self, **kwargs: Any) -> List[E]:
        """조건에 맞는 :class:`E` 객체 리스트를 조회합니다.

        :meth:`get` 과 마찬가지로 ``find(by_field=value)`` 는 ``_find_by_field``
        메소드로 라우팅 됩니다.
        """
        k, v = next(iter(kwargs.items()))
        if k.startswith("by_"):
            method = getattr(self, "_find_" + k, None)
            if method:
                return method(v)
            return self._find(**{k[3:]: v})
        return self._find(**kwargs)

    @abc.abstractmethod
    def _find(self, **kwargs: Any) -> List[E]:
        raise NotImplementedError

    @abc.abstractmethod
    def list(self, params: QueryParameters) -> List[E]:
        """페이지 단위로 정렬된 :class:`E` 객체 리스트를 조회합니다."""
        raise NotImplementedError

    @abc.abstractmethod
    def update(self, item: E) -> Optional[E]:
        """``item.id`` 에 해당하는 데이터의 모든 필드를 갱신합니다.

        갱신된 데이터가 없으면 ``None`` 을 리턴합니다.
        """
        raise NotImplementedError

    @abc.abstractmethod
    def delete(self, id: int) -> None:
        """레포지터리에서 :class:`E` 객체를 삭제합니다. 없는 id 여도 에러가 아닙니다."""
        raise NotImplementedError

    @abc.abstractmethod
    def clear(self) -> None:
        """레포지터리 내의 모든 엔티티 데이터를 지웁니다."""
        raise NotImplementedError
