"""Sneaker 서비스."""
from __future__ import annotations

from dataclasses import replace

from sneakercollection.core import AbstractRepository, NotFoundError, QueryParameters
from sneakercollection.domain import Sneaker, User
from sneakercollection.schema import (
    SneakerCreateSchema,
    SneakerSchema,
    SneakerUpdateSchema,
)
from sneakercollection.services import translate_errors


class SneakerService:
    """:class:`Sneaker` 에 대한 CRUD 서비스."""

    def __init__(
        self, sneakers: AbstractRepository[Sneaker], users: AbstractRepository[User]
    ):
        self.sneakers = sneakers
        self.users = users

    @translate_errors("Something went wrong when trying to Add Sneaker")
    def add(self, dto: SneakerCreateSchema) -> SneakerSchema:
        """스니커즈를 추가합니다.

        Raises:
            NotFoundError: ``user_id`` 에 해당하는 사용자가 없을 때.
        """
        if self.users.get(dto.user_id) is None:
            raise NotFoundError(
                f"No user was found for UserId: '{dto.user_id}',"
                " please enter a valid UserId to add a Sneaker"
            )
        sneaker = self.sneakers.add(Sneaker(**dto.model_dump()))
        return SneakerSchema.model_validate(sneaker)

    @translate_errors("Something went wrong when trying to Get the Sneakers")
    def get_page(
        self,
        page: int = 1,
        page_size: int = 10,
        sort_by: str = "year",
        descending: bool = True,
    ) -> list[SneakerSchema]:
        sneakers = self.sneakers.list(
            QueryParameters(page, page_size, sort_by, descending)
        )
        if not sneakers:
            raise NotFoundError("No Sneakers were found")
        return [SneakerSchema.model_validate(it) for it in sneakers]

    @translate_errors("Something went wrong when trying to Get Sneaker with Id: '{id}'")
    def get_by_id(self, id: int) -> SneakerSchema:
        sneaker = self.sneakers.get(id)
        if sneaker is None:
            raise NotFoundError(f"Sneaker with Id: '{id}' was not found")
        return SneakerSchema.model_validate(sneaker)

    @translate_errors(
        "Something went wrong when trying to Get the Sneakers for UserId: '{user_id}'"
    )
    def get_by_user_id(self, user_id: int) -> list[SneakerSchema]:
        sneakers = self.sneakers.find(by_user_id=user_id)
        if not sneakers:
            raise NotFoundError(f"No Sneakers found for UserId: '{user_id}'")
        return [SneakerSchema.model_validate(it) for it in sneakers]

    @translate_errors(
        "Something went wrong when trying to Get the Sneakers for User Email: '{email}'"
    )
    def get_by_user_email(self, email: str) -> list[SneakerSchema]:
        sneakers = self.sneakers.find(by_user_email=email)
        if not sneakers:
            raise NotFoundError(f"No Sneakers found for User Email: '{email}'")
        return [SneakerSchema.model_validate(it) for it in sneakers]

    @translate_errors(
        "Something went wrong when trying to Update Sneaker with Id: '{dto.id}'"
    )
    def update(self, dto: SneakerUpdateSchema) -> SneakerSchema:
        """``id`` 와 소유자를 제외한 모든 필드를 교체합니다.

        조회 후 저장(read-modify-write)이므로 동시 수정시 나중에 저장한 쪽이
        이깁니다.
        """
        current = self.sneakers.get(dto.id)
        if current is None:
            raise NotFoundError(f"Sneaker with Id: '{dto.id}' was not found")

        updated = self.sneakers.update(replace(current, **dto.model_dump()))
        if updated is None:
            raise NotFoundError(f"Sneaker with Id: '{dto.id}' was not found")
        return SneakerSchema.model_validate(updated)

    @translate_errors("Something went wrong when trying to Delete Sneaker with Id: '{id}'")
    def delete(self, id: int) -> None:
        """스니커즈를 삭제합니다. 없는 id 여도 에러가 아닙니다."""
        self.sneakers.delete(id)
