"""Permissions API: CRUD."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from tenant_admin.api.v1.dependencies import (
    get_permission_service,
    get_permission_service_for_write,
    require_permissions,
)
from tenant_admin.application.services import PermissionService
from tenant_admin.schemas.permission import (
    PermissionCreate,
    PermissionResponse,
    PermissionUpdate,
)

router = APIRouter()


@router.post("", response_model=PermissionResponse, status_code=201)
async def create_permission(
    body: PermissionCreate,
    service: Annotated[PermissionService, Depends(get_permission_service_for_write)],
    _: Annotated[object, Depends(require_permissions("permission:write"))] = None,
):
    permission = await service.create_permission(body.name)
    return PermissionResponse.model_validate(permission)


@router.get("", response_model=list[PermissionResponse])
async def list_permissions(
    service: Annotated[PermissionService, Depends(get_permission_service)],
    include_deleted: bool = False,
    _: Annotated[object, Depends(require_permissions("permission:read"))] = None,
):
    permissions = await service.list_permissions(include_deleted=include_deleted)
    return [PermissionResponse.model_validate(p) for p in permissions]


@router.get("/{permission_id}", response_model=PermissionResponse)
async def get_permission(
    permission_id: int,
    service: Annotated[PermissionService, Depends(get_permission_service)],
    _: Annotated[object, Depends(require_permissions("permission:read"))] = None,
):
    return PermissionResponse.model_validate(await service.get_permission(permission_id))


@router.patch("/{permission_id}", response_model=PermissionResponse)
async def update_permission(
    permission_id: int,
    body: PermissionUpdate,
    service: Annotated[PermissionService, Depends(get_permission_service_for_write)],
    _: Annotated[object, Depends(require_permissions("permission:write"))] = None,
):
    permission = await service.update_permission(permission_id, name=body.name)
    return PermissionResponse.model_validate(permission)


@router.delete("/{permission_id}", status_code=204)
async def delete_permission(
    permission_id: int,
    service: Annotated[PermissionService, Depends(get_permission_service_for_write)],
    _: Annotated[object, Depends(require_permissions("permission:write"))] = None,
) -> Response:
    await service.delete_permission(permission_id)
    return Response(status_code=204)
