"""레포지터리 패턴 구현."""
from __future__ import annotations

from dataclasses import fields
from typing import Any, List, Mapping, Optional, Type, TypeVar

from sqlalchemy import delete, insert, select, update
from sqlalchemy.sql import Select

from sneakercollection.core import KEY_FIELDS, AbstractRepository, Entity, QueryParameters
from sneakercollection.domain import Sneaker, User
from sneakercollection.logging import get_logger
from sneakercollection.orm import SessionMaker, get_table, init_db, sneakers, users

E = TypeVar("E", bound=Entity)

logger = get_logger("sneakercollection.repo")


class SqlAlchemyRepository(AbstractRepository[E]):
    """SqlAlchemy 로 SQL 을 실행하는 :class:`AbstractRepository` 구현입니다.

    엔티티 클래스와 테이블 양쪽에 있는 필드만 컬럼으로 사용합니다. 이 목록은
    생성할 때 한 번만 계산되며, ``id`` 와 ``creation_date`` 는 INSERT/UPDATE 에서
    항상 제외됩니다.

    ``unsortable`` 에 적힌 컬럼은 목록 정렬에 사용할 수 없습니다.

    각 메소드는 자신의 세션을 열고 닫습니다.
    """

    unsortable: tuple[str, ...] = ()

    def __init__(self, entity_class: Type[E], get_session: SessionMaker = None):
        """임의의 엔티티 E 를 받아 E에 대한 Repostiory를 초기화합니다."""
        super().__init__()
        self.entity_class = entity_class
        self.table = get_table(entity_class)
        self.get_session = get_session or init_db()

        self.columns = [
            f.name for f in fields(entity_class) if f.name in self.table.c
        ]
        self.writable_columns = [c for c in self.columns if c not in KEY_FIELDS]
        self.sortable_columns = [c for c in self.columns if c not in self.unsortable]

    def __repr__(self) -> str:
        return f"SqlAlchemyRepository[{self.entity_class.__name__}]"

    def _values(self, item: E) -> dict[str, Any]:
        return {name: getattr(item, name) for name in self.writable_columns}

    def _map_row(self, row: Mapping[str, Any], item: Optional[E] = None) -> E:
        """DB 조회 결과 한 줄을 엔티티로 변환합니다.

        ``item`` 이 주어지면 새로 만들지 않고 그 객체의 필드를 채웁니다.
        """
        values = {name: row[name] for name in self.columns if name in row}
        if item is None:
            return self.entity_class(**values)  # type: ignore
        for name, value in values.items():
            setattr(item, name, value)
        return item

    def _fetch_one(self, stmt: Select) -> Optional[E]:
        with self.get_session() as session:
            row = session.execute(stmt).mappings().first()
        return self._map_row(row) if row else None

    def _fetch_all(self, stmt: Select) -> List[E]:
        with self.get_session() as session:
            rows = session.execute(stmt).mappings().all()
        return [self._map_row(row) for row in rows]

    def add(self, item: E) -> E:
        stmt = (
            insert(self.table)
            .values(**self._values(item))
            .returning(*self.table.c)
        )
        with self.get_session() as session:
            row = session.execute(stmt).mappings().one()
            session.commit()
        return self._map_row(row, item)

    def _get(self, id: Optional[int] = None, **kwargs: Any) -> Optional[E]:
        stmt = select(self.table)
        if id is not None:
            stmt = stmt.where(self.table.c.id == id)
        for name, value in kwargs.items():
            stmt = stmt.where(self.table.c[name] == value)
        return self._fetch_one(stmt.limit(1))

    def _find(self, **kwargs: Any) -> List[E]:
        stmt = select(self.table)
        for name, value in kwargs.items():
            stmt = stmt.where(self.table.c[name] == value)
        return self._fetch_all(stmt.order_by(self.table.c.id))

    def list(self, params: QueryParameters) -> List[E]:
        sort_by = params.resolve_sort_column(self.sortable_columns, default=None)
        if sort_by is None:
            logger.warning(
                "invalid sort column %r for %s, falling back to 'id'",
                params.sort_by,
                self.table.name,
            )
            sort_by = "id"

        column = self.table.c[sort_by]
        stmt = (
            select(self.table)
            .order_by(column.desc() if params.descending else column.asc())
            .offset(params.offset)
            .limit(params.page_size)
        )
        return self._fetch_all(stmt)

    def update(self, item: E) -> Optional[E]:
        stmt = (
            update(self.table)
            .where(self.table.c.id == item.id)
            .values(**self._values(item))
            .returning(*self.table.c)
        )
        with self.get_session() as session:
            row = session.execute(stmt).mappings().first()
            session.commit()
        return self._map_row(row, item) if row else None

    def delete(self, id: int) -> None:
        with self.get_session() as session:
            session.execute(delete(self.table).where(self.table.c.id == id))
            session.commit()

    def clear(self) -> None:
        with self.get_session() as session:
            session.execute(delete(self.table))
            session.commit()


class UserRepository(SqlAlchemyRepository[User]):
    """:class:`User` 레포지터리."""

    # 비밀번호로는 정렬하지 않습니다.
    unsortable = ("password",)

    def __init__(self, get_session: SessionMaker = None):
        super().__init__(User, get_session)

    def _get_by_email(self, email: str) -> Optional[User]:
        return self._fetch_one(select(users).where(users.c.email == email))


class SneakerRepository(SqlAlchemyRepository[Sneaker]):
    """:class:`Sneaker` 레포지터리."""

    def __init__(self, get_session: SessionMaker = None):
        super().__init__(Sneaker, get_session)

    def _find_by_user_id(self, user_id: int) -> List[Sneaker]:
        return self._fetch_all(
            select(sneakers)
            .where(sneakers.c.user_id == user_id)
            .order_by(sneakers.c.id)
        )

    def _find_by_user_email(self, email: str) -> List[Sneaker]:
        return self._fetch_all(
            select(sneakers)
            .join(users, sneakers.c.user_id == users.c.id)
            .where(users.c.email == email)
            .order_by(sneakers.c.id)
        )
