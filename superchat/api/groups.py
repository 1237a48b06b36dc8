# superchat/api/groups.py
from uuid import UUID

from fastapi import APIRouter, Depends

from superchat.api.dependencies import (
    get_current_principal,
    get_current_user,
    get_group_interactor,
)
from superchat.domain.entities import Principal
from superchat.infrastructure import schemas
from superchat.interactors.group_interactor import GroupInteractor

router = APIRouter()


@router.post("", response_model=schemas.Envelope)
async def create_group(
    group: schemas.GroupCreate,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    current_user: Principal = Depends(get_current_user),
):
    new_group = await group_interactor.create_group(current_user.id, group)
    return schemas.Envelope(message="Group created successfully", data={"group": new_group})


@router.get("/{group_id}", response_model=schemas.Envelope)
async def read_group(
    group_id: UUID,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    principal: Principal = Depends(get_current_principal),
):
    group = await group_interactor.get_group(group_id, principal)
    return schemas.Envelope(message="Group retrieved successfully", data={"group": group})


@router.put("/{group_id}", response_model=schemas.Envelope)
async def update_group(
    group_id: UUID,
    group_update: schemas.GroupUpdate,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    principal: Principal = Depends(get_current_principal),
):
    group = await group_interactor.update_group(group_id, principal, group_update)
    return schemas.Envelope(message="Group updated successfully", data={"group": group})


@router.delete("/{group_id}", response_model=schemas.Envelope)
async def delete_group(
    group_id: UUID,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    principal: Principal = Depends(get_current_principal),
):
    await group_interactor.delete_group(group_id, principal)
    return schemas.Envelope(message="Group deleted successfully")


@router.post("/{group_id}/members", response_model=schemas.Envelope)
async def add_member(
    group_id: UUID,
    member: schemas.MemberAdd,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    principal: Principal = Depends(get_current_principal),
):
    added = await group_interactor.add_member(group_id, member.user_id, principal)
    return schemas.Envelope(message="Member added successfully", data={"member": added})


@router.delete("/{group_id}/members/{user_id}", response_model=schemas.Envelope)
async def remove_member(
    group_id: UUID,
    user_id: UUID,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    principal: Principal = Depends(get_current_principal),
):
    removed = await group_interactor.remove_member(group_id, user_id, principal)
    message = "Member removed successfully" if removed else "User was not a member"
    return schemas.Envelope(message=message, data={"removed": removed})


@router.patch("/{group_id}/members/{user_id}/admin", response_model=schemas.Envelope)
async def set_member_admin(
    group_id: UUID,
    user_id: UUID,
    update: schemas.MemberAdminUpdate,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    principal: Principal = Depends(get_current_principal),
):
    member = await group_interactor.set_admin(group_id, user_id, update.is_admin, principal)
    return schemas.Envelope(message="Member role updated successfully", data={"member": member})


@router.post("/{group_id}/report", response_model=schemas.Envelope)
async def report_group(
    group_id: UUID,
    report: schemas.ReportCreate,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    current_user: Principal = Depends(get_current_user),
):
    created = await group_interactor.report_group(current_user.id, group_id, report.reason)
    return schemas.Envelope(message="Group reported successfully", data={"report": created})
