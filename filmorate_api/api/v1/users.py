from http import HTTPStatus
from typing import List

from fastapi import APIRouter, Depends, Response

from filmorate_api.api.http_utils import handle_service_errors
from filmorate_api.dependencies import get_user_service
from filmorate_api.models.users import (
    User, UserCreateRequest, UserUpdateRequest,
)
from filmorate_api.services.user_service import UserService

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.post("", response_model=User, status_code=HTTPStatus.CREATED)
@handle_service_errors()
async def create_user(
    body: UserCreateRequest,
    svc: UserService = Depends(get_user_service),
):
    return await svc.create(body)


@router.put("", response_model=User, status_code=HTTPStatus.OK)
@handle_service_errors()
async def update_user(
    body: UserUpdateRequest,
    svc: UserService = Depends(get_user_service),
):
    return await svc.update(body)


@router.get("", response_model=List[User], status_code=HTTPStatus.OK)
async def list_users(svc: UserService = Depends(get_user_service)):
    return await svc.find_all()


@router.get("/{user_id}", response_model=User, status_code=HTTPStatus.OK)
@handle_service_errors()
async def get_user(
    user_id: int,
    svc: UserService = Depends(get_user_service),
):
    return await svc.find_by_id(user_id)


@router.put("/{user_id}/friends/{friend_id}",
            status_code=HTTPStatus.NO_CONTENT)
@handle_service_errors()
async def add_friend(
    user_id: int,
    friend_id: int,
    svc: UserService = Depends(get_user_service),
) -> Response:
    await svc.add_friend(user_id, friend_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.delete("/{user_id}/friends/{friend_id}",
               status_code=HTTPStatus.NO_CONTENT)
@handle_service_errors()
async def remove_friend(
    user_id: int,
    friend_id: int,
    svc: UserService = Depends(get_user_service),
) -> Response:
    await svc.remove_friend(user_id, friend_id)
    return Response(status_code=HTTPStatus.NO_CONTENT)


@router.get("/{user_id}/friends",
            response_model=List[User],
            status_code=HTTPStatus.OK)
@handle_service_errors()
async def list_friends(
    user_id: int,
    svc: UserService = Depends(get_user_service),
):
    return await svc.get_friends(user_id)


@router.get("/{user_id}/friends/common/{other_id}",
            response_model=List[User],
            status_code=HTTPStatus.OK)
@handle_service_errors()
async def common_friends(
    user_id: int,
    other_id: int,
    svc: UserService = Depends(get_user_service),
):
    return await svc.get_common_friends(user_id, other_id)
