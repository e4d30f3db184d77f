"""User endpoints."""

from typing import Any

from fastapi import APIRouter, Query

from dashboard.schemas.entities import DeleteResult
from dashboard.testing.dependencies import Backend

router = APIRouter(prefix="/api/user")


@router.get("")
async def current_user(backend: Backend) -> dict[str, Any]:
    return backend.default_user.to_wire()


@router.post("", response_model=DeleteResult)
async def create_user() -> DeleteResult:
    return DeleteResult(success=True, errors=[])


@router.post("/password", response_model=DeleteResult)
async def change_password() -> DeleteResult:
    return DeleteResult(success=True, errors=[])


@router.get("/find")
async def find_user(backend: Backend, email: str = Query(...)) -> dict[str, Any]:
    return backend.find_user_by_email(email).to_wire()


@router.get("/{user_id}")
async def get_user(user_id: str, backend: Backend) -> dict[str, Any]:
    return backend.get_user(user_id).to_wire()
