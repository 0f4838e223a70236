"""ORM 어댑터 모듈.

엔티티마다 컬럼 목록이 고정된 :class:`~sqlalchemy.Table` 을 한 번만 정의하고,
레포지터리는 이 테이블로 SQL 문을 만듭니다.
"""
from __future__ import annotations

from contextlib import AbstractContextManager, contextmanager
from decimal import Decimal
from typing import Any, Callable, Generator, Optional, Type, cast

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    create_engine,
    event,
    func,
    insert,
    select,
    text,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.orm.session import Session
from sqlalchemy.pool import Pool

from sneakercollection.config import Config
from sneakercollection.core import SneakerCollectionError
from sneakercollection.logging import get_logger

SessionMaker = Callable[[], Session]
"""Session 팩토리 타입."""
ScopedSession = AbstractContextManager[Session]

logger = get_logger("sneakercollection.orm")

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password", String(255), nullable=False),
    Column("creation_date", DateTime, nullable=False, server_default=func.now()),
)

sneakers = Table(
    "sneakers",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("brand", String(255), nullable=False),
    Column("price", Numeric(18, 2), nullable=False),
    Column("size_us", Float, nullable=False),
    Column("year", Integer, nullable=False),
    Column("rate", Integer, nullable=True),
    Column("creation_date", DateTime, nullable=False, server_default=func.now()),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False),
    CheckConstraint("price >= 0", name="ck_sneakers_price"),
    CheckConstraint("year BETWEEN 1 AND 9999", name="ck_sneakers_year"),
    CheckConstraint("rate BETWEEN 1 AND 5", name="ck_sneakers_rate"),
)

_get_session: Optional[SessionMaker] = None  # pylint: disable=invalid-name


def table_name_for(entity_class: type) -> str:
    """엔티티 클래스 이름을 복수형으로 바꾼 테이블 이름 (``User`` -> ``users``)."""
    return entity_class.__name__.lower() + "s"


def get_table(entity_class: type) -> Table:
    """엔티티 클래스에 매핑된 테이블을 리턴합니다."""
    name = table_name_for(entity_class)
    if name not in metadata.tables:
        raise SneakerCollectionError("table not found for: %r" % entity_class)
    return metadata.tables[name]


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_engine(
    meta: MetaData,
    url: str,
    connect_args: Optional[dict[str, Any]] = None,
    poolclass: Optional[Type[Pool]] = None,
    show_log: bool = False,
    drop_all: bool = False,
) -> Engine:
    """ORM Engine을 초기화 하고 테이블을 생성합니다.

    SQLite 의 경우 외래키 제약조건이 기본적으로 꺼져 있으므로 연결할 때마다
    켜줍니다.
    """
    engine = create_engine(
        url,
        connect_args=connect_args or {},
        poolclass=poolclass,
        echo=show_log,
    )

    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    if drop_all:
        meta.drop_all(engine)

    meta.create_all(engine)

    return engine


def init_db(
    config: Optional[Config] = None,
    db_url: Optional[str] = None,
    drop_all: bool = False,
    show_log: bool = False,
) -> SessionMaker:
    """DB 엔진을 초기화 하고 Session 팩토리를 리턴합니다.

    한 번 만들어진 팩토리는 재사용됩니다.
    """
    global _get_session  # pylint: disable=global-statement

    if _get_session and not drop_all:
        return _get_session

    config = config or Config()
    if db_url:
        config = config.with_overrides(db_url=db_url)

    engine = init_engine(
        metadata,
        config.get_db_url(),
        connect_args=config.get_db_connect_args(),
        poolclass=config.get_db_poolclass(),
        drop_all=drop_all,
        show_log=show_log,
    )
    logger.info("database initialized: %s", engine.url)
    _get_session = cast(SessionMaker, sessionmaker(engine))
    return _get_session


def get_scoped_session(engine: Engine) -> Callable[[], ScopedSession]:
    """``with...`` 문으로 자동 리소스가 반환되는 세션을 리턴합니다.

    Example: ::

        with get_scoped_session(engine)() as db:
            rows = db.execute(select(users)).all()
            ...

    Args:
        engine: Engine.

    """
    session_factory = sessionmaker(engine)

    @contextmanager
    def scoped_session() -> Generator[Session, None, None]:
        session: Optional[Session] = None
        try:
            yield (session := session_factory())  # pylint: disable=superfluous-parens
        finally:
            if session:
                session.close()  # pylint: disable=no-member

    return scoped_session


SEED_USERS = [
    (1, "maria.gonzalez@example.com", "SecurePass123!"),
    (2, "john.doe@example.com", "MyPassword456@"),
    (3, "emily.smith@example.com", "Pass789#"),
]

SEED_SNEAKERS = [
    (1, "Air Max 90", "Nike", "120.00", 8.5, 2020, 4, 1),
    (2, "Ultraboost 4.0", "Adidas", "150.00", 9.0, 2021, 5, 1),
    (3, "Classic Leather", "Reebok", "80.00", 8.0, 2019, 3, 1),
    (4, "Yeezy Boost 350", "Adidas", "220.00", 10.0, 2022, 5, 2),
    (5, "Air Force 1", "Nike", "90.00", 9.5, 2018, 4, 2),
    (6, "Gel-Kayano 28", "Asics", "160.00", 10.5, 2023, 4, 2),
    (7, "Chuck Taylor All Star", "Converse", "60.00", 7.5, 2020, 3, 3),
    (8, "NMD_R1", "Adidas", "130.00", 8.0, 2021, 4, 3),
    (9, "Pegasus 39", "Nike", "115.00", 7.0, 2023, 5, 3),
]


def seed_db(get_session: SessionMaker) -> bool:
    """테이블이 비어 있으면 테스트용 사용자와 스니커즈 데이터를 추가합니다.

    Returns:
        데이터를 추가했으면 ``True``.
    """
    with get_session() as session:
        if session.execute(select(users.c.id).limit(1)).first():
            return False

        session.execute(
            insert(users),
            [dict(id=id, email=email, password=pw) for id, email, pw in SEED_USERS],
        )
        session.execute(
            insert(sneakers),
            [
                dict(
                    id=id,
                    name=name,
                    brand=brand,
                    price=Decimal(price),
                    size_us=size_us,
                    year=year,
                    rate=rate,
                    user_id=user_id,
                )
                for id, name, brand, price, size_us, year, rate, user_id in SEED_SNEAKERS
            ],
        )
        if session.get_bind().dialect.name == "postgresql":
            # 명시적인 id 로 추가했으므로 시퀀스를 맞춰줍니다.
            for table in (users, sneakers):
                session.execute(
                    text(
                        f"SELECT setval(pg_get_serial_sequence('{table.name}', 'id'),"
                        f" (SELECT MAX(id) FROM {table.name}))"
                    )
                )
        session.commit()

    logger.info(
        "seeded %d users and %d sneakers", len(SEED_USERS), len(SEED_SNEAKERS)
    )
    return True
