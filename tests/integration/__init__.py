from decimal import Decimal
from typing import cast

from sqlalchemy import text

from sneakercollection.orm import SessionMaker
from tests import random_email, random_sneaker_name


def insert_user(get_session: SessionMaker, email: str = "", password: str = "pw") -> int:
    if not email:
        email = random_email()

    with get_session() as session:
        session.execute(
            text("INSERT INTO users (email, password) VALUES (:email, :password)"),
            dict(email=email, password=password),
        )
        [[user_id]] = session.execute(
            text("SELECT id FROM users WHERE email=:email"), dict(email=email)
        )
        session.commit()

    return cast(int, user_id)


def insert_sneaker(
    get_session: SessionMaker, user_id: int, name: str = "", year: int = 2020
) -> int:
    if not name:
        name = random_sneaker_name()

    with get_session() as session:
        session.execute(
            text(
                "INSERT INTO sneakers (name, brand, price, size_us, year, rate, user_id)"
                " VALUES (:name, 'Nike', :price, 9.5, :year, 4, :user_id)"
            ),
            dict(name=name, price=str(Decimal("99.99")), year=year, user_id=user_id),
        )
        [[sneaker_id]] = session.execute(
            text("SELECT id FROM sneakers WHERE name=:name"), dict(name=name)
        )
        session.commit()

    return cast(int, sneaker_id)
