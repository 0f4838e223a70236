"""User 서비스."""
from __future__ import annotations

from sneakercollection.core import AbstractRepository, NotFoundError, QueryParameters
from sneakercollection.domain import User
from sneakercollection.schema import UserLoginSchema, UserSchema, UserUpdateSchema
from sneakercollection.services import translate_errors


class UserService:
    """:class:`User` 에 대한 CRUD 서비스."""

    def __init__(self, users: AbstractRepository[User]):
        self.users = users

    @translate_errors("Something went wrong when trying to Add User with Email: '{dto.email}'")
    def add(self, dto: UserLoginSchema) -> UserSchema:
        """사용자를 추가합니다. 중복된 이메일은 저장소 에러로 실패합니다."""
        user = self.users.add(User(**dto.model_dump()))
        return UserSchema.model_validate(user)

    @translate_errors("Something went wrong when trying to Get the Users")
    def get_page(
        self,
        page: int = 1,
        page_size: int = 10,
        sort_by: str = "email",
        descending: bool = True,
    ) -> list[UserSchema]:
        """사용자 목록을 페이지 단위로 조회합니다.

        Raises:
            NotFoundError: 조회된 사용자가 없을 때.
        """
        users = self.users.list(QueryParameters(page, page_size, sort_by, descending))
        if not users:
            raise NotFoundError("No Users were found")
        return [UserSchema.model_validate(it) for it in users]

    @translate_errors("Something went wrong when trying to Get User with Id: '{id}'")
    def get_by_id(self, id: int) -> UserSchema:
        user = self.users.get(id)
        if user is None:
            raise NotFoundError(f"User with Id: '{id}' was not found")
        return UserSchema.model_validate(user)

    @translate_errors("Something went wrong when trying to Get User with Email: '{email}'")
    def get_by_email(self, email: str) -> UserSchema:
        user = self.users.get(by_email=email)
        if user is None:
            raise NotFoundError(f"User with Email: '{email}' was not found")
        return UserSchema.model_validate(user)

    @translate_errors("Something went wrong when trying to Update User with Email: '{dto.email}'")
    def update(self, dto: UserUpdateSchema) -> UserSchema:
        """``id`` 를 제외한 모든 필드를 교체합니다.

        먼저 조회해서 존재를 확인한 뒤 저장하므로 원자적이지 않습니다. 같은
        사용자를 동시에 수정하면 나중에 저장한 쪽이 이깁니다.
        """
        if self.users.get(dto.id) is None:
            raise NotFoundError(f"User with Id: '{dto.id}' was not found")

        updated = self.users.update(User(**dto.model_dump()))
        if updated is None:
            raise NotFoundError(f"User with Id: '{dto.id}' was not found")
        return UserSchema.model_validate(updated)

    @translate_errors("Something went wrong when trying to Delete User with Id: '{id}'")
    def delete(self, id: int) -> None:
        """사용자를 삭제합니다. 없는 id 여도 에러가 아닙니다."""
        self.users.delete(id)
