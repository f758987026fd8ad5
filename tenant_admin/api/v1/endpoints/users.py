"""Users API: current identity, CRUD, activation, and role assignment."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from tenant_admin.api.v1.dependencies import (
    get_user_service,
    get_user_service_for_write,
    require_any_permission,
    require_identity,
    require_permissions,
)
from tenant_admin.application.services import UserService
from tenant_admin.domain.identity import Identity
from tenant_admin.schemas.common import AssignmentResponse
from tenant_admin.schemas.role import RoleResponse
from tenant_admin.schemas.user import (
    CurrentIdentityResponse,
    UserCreate,
    UserResponse,
    UserRoleAssign,
    UserUpdate,
)

router = APIRouter()


@router.get("/me", response_model=CurrentIdentityResponse)
async def get_me(identity: Annotated[Identity, Depends(require_identity)]):
    """The caller's resolved identity with sorted roles and permissions."""
    return CurrentIdentityResponse(
        user_id=identity.user_id,
        subject_id=identity.subject_id,
        username=identity.username,
        email=identity.email,
        roles=sorted(identity.roles),
        permissions=sorted(identity.permissions),
    )


@router.post("", response_model=UserResponse, status_code=201)
async def create_user(
    body: UserCreate,
    service: Annotated[UserService, Depends(get_user_service_for_write)],
    _: Annotated[object, Depends(require_permissions("user:write"))] = None,
):
    user = await service.create_user(
        external_subject_id=body.external_subject_id,
        username=body.username,
        email=str(body.email),
    )
    return UserResponse.model_validate(user)


@router.get("", response_model=list[UserResponse])
async def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
    include_deleted: bool = False,
    _: Annotated[object, Depends(require_permissions("user:read"))] = None,
):
    users = await service.list_users(include_deleted=include_deleted)
    return [UserResponse.model_validate(u) for u in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
    _: Annotated[object, Depends(require_permissions("user:read"))] = None,
):
    return UserResponse.model_validate(await service.get_user(user_id))


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    body: UserUpdate,
    service: Annotated[UserService, Depends(get_user_service_for_write)],
    _: Annotated[object, Depends(require_permissions("user:write"))] = None,
):
    user = await service.update_user(
        user_id,
        username=body.username,
        email=str(body.email) if body.email is not None else None,
    )
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service_for_write)],
    _: Annotated[object, Depends(require_permissions("user:write"))] = None,
) -> Response:
    await service.delete_user(user_id)
    return Response(status_code=204)


@router.post("/{user_id}/deactivate", response_model=UserResponse)
async def deactivate_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service_for_write)],
    _: Annotated[object, Depends(require_permissions("user:write"))] = None,
):
    """Mark the user inactive and disable sign-in at the identity provider."""
    return UserResponse.model_validate(await service.deactivate_user(user_id))


@router.post("/{user_id}/activate", response_model=UserResponse)
async def activate_user(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service_for_write)],
    _: Annotated[object, Depends(require_permissions("user:write"))] = None,
):
    return UserResponse.model_validate(await service.activate_user(user_id))


@router.get("/{user_id}/roles", response_model=list[RoleResponse])
async def list_user_roles(
    user_id: str,
    service: Annotated[UserService, Depends(get_user_service)],
    _: Annotated[object, Depends(require_any_permission("user:read", "role:read"))] = None,
):
    roles = await service.get_roles_for_user(user_id)
    return [RoleResponse.model_validate(r) for r in roles]


@router.post("/{user_id}/roles", response_model=AssignmentResponse)
async def assign_role(
    user_id: str,
    body: UserRoleAssign,
    service: Annotated[UserService, Depends(get_user_service_for_write)],
    _: Annotated[object, Depends(require_permissions("user:write", "role:read"))] = None,
):
    changed = await service.assign_role_to_user(user_id, body.role_id)
    return AssignmentResponse(changed=changed)


@router.delete("/{user_id}/roles/{role_id}", response_model=AssignmentResponse)
async def remove_role(
    user_id: str,
    role_id: str,
    service: Annotated[UserService, Depends(get_user_service_for_write)],
    _: Annotated[object, Depends(require_permissions("user:write"))] = None,
):
    changed = await service.remove_role_from_user(user_id, role_id)
    return AssignmentResponse(changed=changed)
