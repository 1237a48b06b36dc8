# superchat/api/users.py
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from superchat.api.dependencies import (
    Pagination,
    get_current_principal,
    get_current_user,
    get_notification_interactor,
    get_user_interactor,
    require_admin,
)
from superchat.domain import errors
from superchat.domain.entities import Principal
from superchat.infrastructure import schemas
from superchat.interactors.notification_interactor import NotificationInteractor
from superchat.interactors.user_interactor import UserInteractor

router = APIRouter()


@router.get("", response_model=schemas.Envelope)
async def read_users(
    pagination: Pagination = Depends(),
    search: str | None = Query(None, description="Match on name or phone number"),
    user_interactor: UserInteractor = Depends(get_user_interactor),
    admin: Principal = Depends(require_admin),
):
    page = await user_interactor.get_users(pagination.page, pagination.limit, search)
    return schemas.Envelope(message="Users retrieved successfully", data=page.as_data())


# /me routes are declared before /{user_id} so "me" is never parsed as an id


@router.get("/me/blocked", response_model=schemas.Envelope)
async def read_blocked_users(
    user_interactor: UserInteractor = Depends(get_user_interactor),
    current_user: Principal = Depends(get_current_user),
):
    blocked = await user_interactor.list_blocked_users(current_user.id)
    return schemas.Envelope(
        message="Blocked users retrieved successfully", data={"blockedUsers": blocked}
    )


@router.get("/me/notification-tokens", response_model=schemas.Envelope)
async def read_notification_tokens(
    notification_interactor: NotificationInteractor = Depends(get_notification_interactor),
    current_user: Principal = Depends(get_current_user),
):
    tokens = await notification_interactor.list_tokens(current_user.id)
    return schemas.Envelope(
        message="Notification tokens retrieved successfully", data={"tokens": tokens}
    )


@router.post("/me/notification-tokens", response_model=schemas.Envelope)
async def register_notification_token(
    token: schemas.NotificationTokenCreate,
    notification_interactor: NotificationInteractor = Depends(get_notification_interactor),
    current_user: Principal = Depends(get_current_user),
):
    saved = await notification_interactor.register_token(current_user.id, token)
    return schemas.Envelope(
        message="Notification token registered successfully", data={"token": saved}
    )


@router.delete("/me/notification-tokens", response_model=schemas.Envelope)
async def delete_notification_token(
    token: str = Query(..., min_length=1),
    notification_interactor: NotificationInteractor = Depends(get_notification_interactor),
    current_user: Principal = Depends(get_current_user),
):
    await notification_interactor.unregister_token(current_user.id, token)
    return schemas.Envelope(message="Notification token removed successfully")


@router.get("/{user_id}", response_model=schemas.Envelope)
async def read_user(
    user_id: UUID,
    user_interactor: UserInteractor = Depends(get_user_interactor),
    principal: Principal = Depends(get_current_principal),
):
    user = await user_interactor.get_user(user_id)
    return schemas.Envelope(message="User retrieved successfully", data={"user": user})


@router.put("/{user_id}", response_model=schemas.Envelope)
async def update_user(
    user_id: UUID,
    user_update: schemas.UserUpdate,
    user_interactor: UserInteractor = Depends(get_user_interactor),
    principal: Principal = Depends(get_current_principal),
):
    if not principal.is_admin and principal.id != user_id:
        raise errors.ForbiddenError("You can only update your own profile")
    user = await user_interactor.update_user(user_id, user_update)
    return schemas.Envelope(message="User updated successfully", data={"user": user})


@router.patch("/{user_id}/verify", response_model=schemas.Envelope)
async def update_verification_status(
    user_id: UUID,
    update: schemas.VerificationUpdate,
    user_interactor: UserInteractor = Depends(get_user_interactor),
    admin: Principal = Depends(require_admin),
):
    user = await user_interactor.update_verification_status(user_id, update.verified)
    return schemas.Envelope(
        message="User verification status updated successfully", data={"user": user}
    )


@router.patch("/{user_id}/disable", response_model=schemas.Envelope)
async def update_disabled_status(
    user_id: UUID,
    update: schemas.DisabledUpdate,
    user_interactor: UserInteractor = Depends(get_user_interactor),
    admin: Principal = Depends(require_admin),
):
    user = await user_interactor.update_disabled_status(user_id, update.disabled)
    return schemas.Envelope(
        message="User disabled status updated successfully", data={"user": user}
    )


@router.delete("/{user_id}", response_model=schemas.Envelope)
async def delete_user(
    user_id: UUID,
    user_interactor: UserInteractor = Depends(get_user_interactor),
    admin: Principal = Depends(require_admin),
):
    await user_interactor.delete_user(user_id)
    return schemas.Envelope(message="User deleted successfully")


@router.post("/{user_id}/report", response_model=schemas.Envelope)
async def report_user(
    user_id: UUID,
    report: schemas.ReportCreate,
    user_interactor: UserInteractor = Depends(get_user_interactor),
    current_user: Principal = Depends(get_current_user),
):
    created = await user_interactor.report_user(current_user.id, user_id, report.reason)
    return schemas.Envelope(message="User reported successfully", data={"report": created})


@router.post("/{user_id}/block", response_model=schemas.Envelope)
async def block_user(
    user_id: UUID,
    user_interactor: UserInteractor = Depends(get_user_interactor),
    current_user: Principal = Depends(get_current_user),
):
    created = await user_interactor.block_user(current_user.id, user_id)
    message = "User blocked successfully" if created else "User was already blocked"
    return schemas.Envelope(message=message)


@router.delete("/{user_id}/block", response_model=schemas.Envelope)
async def unblock_user(
    user_id: UUID,
    user_interactor: UserInteractor = Depends(get_user_interactor),
    current_user: Principal = Depends(get_current_user),
):
    removed = await user_interactor.unblock_user(current_user.id, user_id)
    message = "User unblocked successfully" if removed else "User was not blocked"
    return schemas.Envelope(message=message)
