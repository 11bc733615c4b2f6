from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from user_service.applications.interfaces.dtos.filter_page import UserFilterPage
from user_service.applications.interfaces.dtos.message import Message
from user_service.applications.interfaces.dtos.statistics import UserStatisticsPublic
from user_service.applications.interfaces.dtos.user import (
    UserList,
    UserPublic,
    UserSchema,
    UserUpdateSchema,
)
from user_service.applications.use_cases.user.create_user import CreateUserUseCase
from user_service.applications.use_cases.user.delete_user import DeleteUserUseCase
from user_service.applications.use_cases.user.get_user import GetUserUseCase
from user_service.applications.use_cases.user.get_user_statistics import GetUserStatisticsUseCase
from user_service.applications.use_cases.user.get_users import GetUsersUseCase
from user_service.applications.use_cases.user.hard_delete_user import HardDeleteUserUseCase
from user_service.applications.use_cases.user.set_user_active import SetUserActiveUseCase
from user_service.applications.use_cases.user.update_user import UpdateUserUseCase
from user_service.domain.exceptions import ConflictError, NotFoundError
from user_service.domain.ports.repositories.user_repository import UserRepository
from user_service.infrastructure.config.dependencies import get_user_repository

router = APIRouter(prefix="/users", tags=["users"])

UserRepositoryDep = Annotated[UserRepository, Depends(get_user_repository)]
UserId = Annotated[int, Path(gt=0, description="User ID")]


# Declared before /{user_id} so "stats" is not parsed as an ID
@router.get("/stats", response_model=UserStatisticsPublic)
async def read_user_statistics(user_repository: UserRepositoryDep):
    use_case = GetUserStatisticsUseCase(user_repository)
    return await use_case.execute()


@router.post("/", status_code=HTTPStatus.CREATED, response_model=UserPublic)
async def create_user(user: UserSchema, user_repository: UserRepositoryDep):
    try:
        use_case = CreateUserUseCase(user_repository)
        return await use_case.execute(user)
    except ConflictError as e:
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=str(e))


@router.get("/", response_model=UserList)
async def read_users(filter_users: Annotated[UserFilterPage, Query()], user_repository: UserRepositoryDep):
    use_case = GetUsersUseCase(user_repository)
    return await use_case.execute(filter_users)


@router.get("/{user_id}", response_model=UserPublic)
async def read_user(user_id: UserId, user_repository: UserRepositoryDep):
    try:
        use_case = GetUserUseCase(user_repository)
        return await use_case.execute(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(e))


@router.put("/{user_id}", response_model=UserPublic)
async def update_user(user_id: UserId, user: UserUpdateSchema, user_repository: UserRepositoryDep):
    try:
        use_case = UpdateUserUseCase(user_repository)
        return await use_case.execute(user_id, user)
    except NotFoundError as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=str(e))


@router.delete("/{user_id}", response_model=Message)
async def delete_user(user_id: UserId, user_repository: UserRepositoryDep):
    try:
        use_case = DeleteUserUseCase(user_repository)
        return await use_case.execute(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(e))


@router.delete("/{user_id}/hard", response_model=Message)
async def hard_delete_user(user_id: UserId, user_repository: UserRepositoryDep):
    try:
        use_case = HardDeleteUserUseCase(user_repository)
        return await use_case.execute(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(e))


@router.patch("/{user_id}/activate", response_model=UserPublic)
async def activate_user(user_id: UserId, user_repository: UserRepositoryDep):
    try:
        use_case = SetUserActiveUseCase(user_repository)
        return await use_case.execute(user_id, True)
    except NotFoundError as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(e))


@router.patch("/{user_id}/deactivate", response_model=UserPublic)
async def deactivate_user(user_id: UserId, user_repository: UserRepositoryDep):
    try:
        use_case = SetUserActiveUseCase(user_repository)
        return await use_case.execute(user_id, False)
    except NotFoundError as e:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail=str(e))
