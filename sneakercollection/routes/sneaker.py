"""``/api/Sneaker`` 엔드포인트.

모든 엔드포인트는 인증이 필요합니다.
"""
from __future__ import annotations

from fastapi import Depends, Query

from sneakercollection.api import (
    app,
    get_current_user,
    get_sneaker_service,
    no_content,
    respond,
)
from sneakercollection.schema import SneakerCreateSchema, SneakerUpdateSchema
from sneakercollection.services import SneakerService

authorized = [Depends(get_current_user)]


@app.get("/api/Sneaker", dependencies=authorized)
def get_sneakers(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, alias="pageSize"),
    sort_by: str = Query("year", alias="sortBy"),
    descending: bool = Query(True),
    service: SneakerService = Depends(get_sneaker_service),
):
    """``GET /api/Sneaker`` 스니커즈 목록을 페이지 단위로 조회합니다.

    기본 정렬은 출시년도(``year``) 내림차순입니다.
    """
    return respond(service.get_page(page, page_size, sort_by, descending))


@app.get("/api/Sneaker/GetByUserId", dependencies=authorized)
def get_sneakers_by_user_id(
    user_id: int = Query(..., alias="userId"),
    service: SneakerService = Depends(get_sneaker_service),
):
    return respond(service.get_by_user_id(user_id))


@app.get("/api/Sneaker/GetByUserEmail", dependencies=authorized)
def get_sneakers_by_user_email(
    email: str = Query(...), service: SneakerService = Depends(get_sneaker_service)
):
    return respond(service.get_by_user_email(email))


@app.get("/api/Sneaker/{id}", dependencies=authorized)
def get_sneaker(id: int, service: SneakerService = Depends(get_sneaker_service)):
    return respond(service.get_by_id(id))


@app.post("/api/Sneaker", status_code=201, dependencies=authorized)
def add_sneaker(
    dto: SneakerCreateSchema, service: SneakerService = Depends(get_sneaker_service)
):
    return respond(service.add(dto), status_code=201)


@app.patch("/api/Sneaker", dependencies=authorized)
def update_sneaker(
    dto: SneakerUpdateSchema, service: SneakerService = Depends(get_sneaker_service)
):
    """``PATCH /api/Sneaker`` 소유자를 제외한 모든 필드를 교체합니다."""
    return respond(service.update(dto))


@app.delete("/api/Sneaker/{id}", status_code=204, dependencies=authorized)
def delete_sneaker(id: int, service: SneakerService = Depends(get_sneaker_service)):
    service.delete(id)
    return no_content()
