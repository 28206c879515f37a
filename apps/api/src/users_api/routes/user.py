"""User API routes.

Handlers are synchronous so FastAPI runs each request's blocking storage calls in its
threadpool. Domain errors raised by the service are turned into ``{"error": ...}``
responses by the exception handlers registered in ``users_api.main``.
"""

from fastapi import APIRouter, Depends, Response, status

from users_api.services import get_user_service
from users_common.models.user import CreateUserRequest, UpdateUserRequest, User, UserView
from users_common.services import UserService

router = APIRouter(prefix="/users", tags=["users"], redirect_slashes=False)


def to_view(user: User) -> UserView:
    return UserView(id=user.id, name=user.name, email=user.email)


@router.get("", response_model=list[UserView])
@router.get("/", response_model=list[UserView], include_in_schema=False)
def list_users(service: UserService = Depends(get_user_service)) -> list[UserView]:
    return [to_view(user) for user in service.get_all()]


@router.get("/{user_id}", response_model=UserView)
def get_user(user_id: str, service: UserService = Depends(get_user_service)) -> UserView:
    return to_view(service.get_by_id(user_id))


@router.post("", response_model=UserView, status_code=status.HTTP_200_OK)
@router.post("/", response_model=UserView, status_code=status.HTTP_200_OK, include_in_schema=False)
def create_user(request: CreateUserRequest, service: UserService = Depends(get_user_service)) -> UserView:
    return to_view(service.create(request))


@router.patch("/{user_id}", response_model=UserView)
def update_user(
    user_id: str,
    request: UpdateUserRequest,
    service: UserService = Depends(get_user_service),
) -> UserView:
    return to_view(service.update_by_id(user_id, request))


@router.delete("/{user_id}", status_code=status.HTTP_200_OK, response_class=Response)
def delete_user(user_id: str, service: UserService = Depends(get_user_service)) -> Response:
    service.delete_by_id(user_id)
    return Response(status_code=status.HTTP_200_OK)
