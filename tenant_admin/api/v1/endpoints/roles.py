"""Roles API: CRUD and role-permission assignment."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from tenant_admin.api.v1.dependencies import (
    get_role_service,
    get_role_service_for_write,
    require_permissions,
)
from tenant_admin.application.services import RoleService
from tenant_admin.schemas.common import AssignmentResponse
from tenant_admin.schemas.permission import PermissionResponse
from tenant_admin.schemas.role import (
    RoleCreate,
    RolePermissionAssign,
    RoleResponse,
    RoleUpdate,
)

router = APIRouter()


@router.post("", response_model=RoleResponse, status_code=201)
async def create_role(
    body: RoleCreate,
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
    _: Annotated[object, Depends(require_permissions("role:write"))] = None,
):
    """Create a role. 409 if an active role already has this name."""
    role = await service.create_role(body.name)
    return RoleResponse.model_validate(role)


@router.get("", response_model=list[RoleResponse])
async def list_roles(
    service: Annotated[RoleService, Depends(get_role_service)],
    include_deleted: bool = False,
    _: Annotated[object, Depends(require_permissions("role:read"))] = None,
):
    roles = await service.list_roles(include_deleted=include_deleted)
    return [RoleResponse.model_validate(r) for r in roles]


@router.get("/{role_id}", response_model=RoleResponse)
async def get_role(
    role_id: str,
    service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(require_permissions("role:read"))] = None,
):
    return RoleResponse.model_validate(await service.get_role(role_id))


@router.patch("/{role_id}", response_model=RoleResponse)
async def update_role(
    role_id: str,
    body: RoleUpdate,
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
    _: Annotated[object, Depends(require_permissions("role:write"))] = None,
):
    role = await service.update_role(role_id, name=body.name)
    return RoleResponse.model_validate(role)


@router.delete("/{role_id}", status_code=204)
async def delete_role(
    role_id: str,
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
    _: Annotated[object, Depends(require_permissions("role:write"))] = None,
) -> Response:
    """Soft-delete a role. 404 if missing or already deleted."""
    await service.delete_role(role_id)
    return Response(status_code=204)


@router.get("/{role_id}/permissions", response_model=list[PermissionResponse])
async def list_role_permissions(
    role_id: str,
    service: Annotated[RoleService, Depends(get_role_service)],
    _: Annotated[object, Depends(require_permissions("role:read"))] = None,
):
    permissions = await service.get_permissions_for_role(role_id)
    return [PermissionResponse.model_validate(p) for p in permissions]


@router.post("/{role_id}/permissions", response_model=AssignmentResponse)
async def assign_permission(
    role_id: str,
    body: RolePermissionAssign,
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
    _: Annotated[object, Depends(require_permissions("role:write"))] = None,
):
    """Attach a permission; changed is False when it was already attached."""
    changed = await service.assign_permission_to_role(role_id, body.permission_id)
    return AssignmentResponse(changed=changed)


@router.delete("/{role_id}/permissions/{permission_id}", response_model=AssignmentResponse)
async def remove_permission(
    role_id: str,
    permission_id: int,
    service: Annotated[RoleService, Depends(get_role_service_for_write)],
    _: Annotated[object, Depends(require_permissions("role:write"))] = None,
):
    changed = await service.remove_permission_from_role(role_id, permission_id)
    return AssignmentResponse(changed=changed)
