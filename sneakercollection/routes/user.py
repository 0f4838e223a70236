"""``/api/User`` 엔드포인트."""
from __future__ import annotations

from fastapi import Depends, Query

from sneakercollection.api import (
    app,
    get_current_user,
    get_user_service,
    no_content,
    respond,
)
from sneakercollection.schema import UserLoginSchema, UserUpdateSchema
from sneakercollection.services import UserService

authorized = [Depends(get_current_user)]


@app.get("/api/User", dependencies=authorized)
def get_users(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, alias="pageSize"),
    sort_by: str = Query("email", alias="sortBy"),
    descending: bool = Query(True),
    service: UserService = Depends(get_user_service),
):
    """``GET /api/User`` 사용자 목록을 페이지 단위로 조회합니다."""
    return respond(service.get_page(page, page_size, sort_by, descending))


@app.get("/api/User/GetByEmail", dependencies=authorized)
def get_user_by_email(
    email: str = Query(...), service: UserService = Depends(get_user_service)
):
    return respond(service.get_by_email(email))


@app.get("/api/User/{id}", dependencies=authorized)
def get_user(id: int, service: UserService = Depends(get_user_service)):
    return respond(service.get_by_id(id))


@app.post("/api/User", status_code=201)
def add_user(dto: UserLoginSchema, service: UserService = Depends(get_user_service)):
    """``POST /api/User`` 새 사용자를 추가합니다. 인증 없이 호출할 수 있습니다."""
    return respond(service.add(dto), status_code=201)


@app.patch("/api/User", dependencies=authorized)
def update_user(
    dto: UserUpdateSchema, service: UserService = Depends(get_user_service)
):
    return respond(service.update(dto))


@app.delete("/api/User/{id}", status_code=204, dependencies=authorized)
def delete_user(id: int, service: UserService = Depends(get_user_service)):
    service.delete(id)
    return no_content()
