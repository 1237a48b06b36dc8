# superchat/api/admin.py
from uuid import UUID

from fastapi import APIRouter, Depends

from superchat.api.dependencies import (
    Pagination,
    get_auth_interactor,
    get_group_interactor,
    get_settings_interactor,
    get_user_interactor,
    require_admin,
)
from superchat.domain.entities import Principal
from superchat.infrastructure import schemas
from superchat.interactors.auth_interactor import AuthInteractor
from superchat.interactors.group_interactor import GroupInteractor
from superchat.interactors.settings_interactor import SettingsInteractor
from superchat.interactors.user_interactor import UserInteractor

router = APIRouter()


@router.post("/login", response_model=schemas.Envelope)
async def admin_login(
    credentials: schemas.AdminLoginRequest,
    auth_interactor: AuthInteractor = Depends(get_auth_interactor),
):
    token = await auth_interactor.admin_login(credentials.username, credentials.password)
    return schemas.Envelope(message="Admin logged in successfully", data=token)


@router.get("/settings", response_model=schemas.Envelope)
async def read_settings(
    settings_interactor: SettingsInteractor = Depends(get_settings_interactor),
    admin: Principal = Depends(require_admin),
):
    settings = await settings_interactor.get_settings()
    return schemas.Envelope(
        message="Settings retrieved successfully", data={"settings": settings}
    )


@router.put("/settings", response_model=schemas.Envelope)
async def update_settings(
    settings_update: schemas.AppSettingsUpdate,
    settings_interactor: SettingsInteractor = Depends(get_settings_interactor),
    admin: Principal = Depends(require_admin),
):
    settings = await settings_interactor.update_settings(settings_update)
    return schemas.Envelope(message="Settings updated successfully", data={"settings": settings})


@router.get("/reports/users", response_model=schemas.Envelope)
async def read_user_reports(
    pagination: Pagination = Depends(),
    user_interactor: UserInteractor = Depends(get_user_interactor),
    admin: Principal = Depends(require_admin),
):
    page = await user_interactor.list_user_reports(pagination.page, pagination.limit)
    return schemas.Envelope(message="User reports retrieved successfully", data=page.as_data())


@router.get("/reports/groups", response_model=schemas.Envelope)
async def read_group_reports(
    pagination: Pagination = Depends(),
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    admin: Principal = Depends(require_admin),
):
    page = await group_interactor.list_group_reports(pagination.page, pagination.limit)
    return schemas.Envelope(message="Group reports retrieved successfully", data=page.as_data())


@router.patch("/groups/{group_id}/disable", response_model=schemas.Envelope)
async def update_group_disabled_status(
    group_id: UUID,
    update: schemas.DisabledUpdate,
    group_interactor: GroupInteractor = Depends(get_group_interactor),
    admin: Principal = Depends(require_admin),
):
    group = await group_interactor.set_group_disabled(group_id, update.disabled)
    return schemas.Envelope(
        message="Group disabled status updated successfully", data={"group": group}
    )
