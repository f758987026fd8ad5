"""Tenants API: CRUD, tenant creation with first admin, and membership."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response

from tenant_admin.api.v1.dependencies import (
    get_tenant_service,
    get_tenant_service_for_write,
    require_permissions,
    require_roles,
)
from tenant_admin.application.services import TenantService
from tenant_admin.schemas.common import AssignmentResponse
from tenant_admin.schemas.tenant import (
    MembershipCreate,
    MembershipResponse,
    TenantCreate,
    TenantCreationResponse,
    TenantResponse,
    TenantUpdate,
    TenantWithAdminCreate,
)

router = APIRouter()

PLATFORM_ADMIN_ROLE = "platform-admin"


@router.post("", response_model=TenantResponse, status_code=201)
async def create_tenant(
    body: TenantCreate,
    service: Annotated[TenantService, Depends(get_tenant_service_for_write)],
    _: Annotated[object, Depends(require_permissions("tenant:write"))] = None,
):
    tenant = await service.create_tenant(body.name, description=body.description)
    return TenantResponse.model_validate(tenant)


@router.post("/with-admin", response_model=TenantCreationResponse, status_code=201)
async def create_tenant_with_admin(
    body: TenantWithAdminCreate,
    service: Annotated[TenantService, Depends(get_tenant_service_for_write)],
    _: Annotated[object, Depends(require_permissions("tenant:write", "user:write"))] = None,
    _role: Annotated[object, Depends(require_roles(PLATFORM_ADMIN_ROLE))] = None,
):
    """Create tenant, its first admin in the identity provider and locally, and the membership.

    Runs in one transaction; the provider user is removed again if the local writes fail.
    """
    result = await service.create_with_admin(
        name=body.name,
        description=body.description,
        admin_username=body.admin_username,
        admin_email=str(body.admin_email),
        admin_role_name=body.admin_role_name,
    )
    return TenantCreationResponse.model_validate(result)


@router.get("", response_model=list[TenantResponse])
async def list_tenants(
    service: Annotated[TenantService, Depends(get_tenant_service)],
    include_deleted: bool = False,
    _: Annotated[object, Depends(require_permissions("tenant:read"))] = None,
):
    tenants = await service.list_tenants(include_deleted=include_deleted)
    return [TenantResponse.model_validate(t) for t in tenants]


@router.get("/{tenant_id}", response_model=TenantResponse)
async def get_tenant(
    tenant_id: str,
    service: Annotated[TenantService, Depends(get_tenant_service)],
    _: Annotated[object, Depends(require_permissions("tenant:read"))] = None,
):
    return TenantResponse.model_validate(await service.get_tenant(tenant_id))


@router.patch("/{tenant_id}", response_model=TenantResponse)
async def update_tenant(
    tenant_id: str,
    body: TenantUpdate,
    service: Annotated[TenantService, Depends(get_tenant_service_for_write)],
    _: Annotated[object, Depends(require_permissions("tenant:write"))] = None,
):
    tenant = await service.update_tenant(
        tenant_id, name=body.name, description=body.description
    )
    return TenantResponse.model_validate(tenant)


@router.delete("/{tenant_id}", status_code=204)
async def delete_tenant(
    tenant_id: str,
    service: Annotated[TenantService, Depends(get_tenant_service_for_write)],
    _: Annotated[object, Depends(require_permissions("tenant:write"))] = None,
) -> Response:
    await service.delete_tenant(tenant_id)
    return Response(status_code=204)


@router.get("/{tenant_id}/members", response_model=list[MembershipResponse])
async def list_members(
    tenant_id: str,
    service: Annotated[TenantService, Depends(get_tenant_service)],
    _: Annotated[object, Depends(require_permissions("tenant:read"))] = None,
):
    members = await service.list_members(tenant_id)
    return [MembershipResponse.model_validate(m) for m in members]


@router.post("/{tenant_id}/members", response_model=MembershipResponse, status_code=201)
async def add_member(
    tenant_id: str,
    body: MembershipCreate,
    service: Annotated[TenantService, Depends(get_tenant_service_for_write)],
    _: Annotated[object, Depends(require_permissions("tenant:write"))] = None,
):
    membership = await service.add_member(tenant_id, body.user_id)
    return MembershipResponse.model_validate(membership)


@router.delete("/{tenant_id}/members/{user_id}", response_model=AssignmentResponse)
async def remove_member(
    tenant_id: str,
    user_id: str,
    service: Annotated[TenantService, Depends(get_tenant_service_for_write)],
    _: Annotated[object, Depends(require_permissions("tenant:write"))] = None,
):
    changed = await service.remove_member(tenant_id, user_id)
    return AssignmentResponse(changed=changed)
