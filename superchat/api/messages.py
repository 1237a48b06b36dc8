# superchat/api/messages.py
from uuid import UUID

from fastapi import APIRouter, Depends

from superchat.api.dependencies import Pagination, get_current_user, get_message_interactor
from superchat.domain.entities import Principal
from superchat.infrastructure import schemas
from superchat.interactors.message_interactor import MessageInteractor

router = APIRouter()


@router.post("", response_model=schemas.Envelope)
async def send_message(
    message: schemas.MessageCreate,
    message_interactor: MessageInteractor = Depends(get_message_interactor),
    current_user: Principal = Depends(get_current_user),
):
    sent = await message_interactor.send_message(current_user.id, message)
    return schemas.Envelope(
        message="Message sent successfully",
        data={"message": sent.message, "recipientCount": sent.recipient_count},
    )


@router.get("/inbox", response_model=schemas.Envelope)
async def read_inbox(
    pagination: Pagination = Depends(),
    message_interactor: MessageInteractor = Depends(get_message_interactor),
    current_user: Principal = Depends(get_current_user),
):
    page = await message_interactor.list_inbox(
        current_user.id, pagination.page, pagination.limit
    )
    return schemas.Envelope(message="Messages retrieved successfully", data=page.as_data())


@router.get("/unread-count", response_model=schemas.Envelope)
async def read_unread_count(
    message_interactor: MessageInteractor = Depends(get_message_interactor),
    current_user: Principal = Depends(get_current_user),
):
    count = await message_interactor.get_unread_count(current_user.id)
    return schemas.Envelope(
        message="Unread count retrieved successfully", data={"unreadCount": count}
    )


@router.patch("/{message_id}/read", response_model=schemas.Envelope)
async def mark_message_read(
    message_id: UUID,
    message_interactor: MessageInteractor = Depends(get_message_interactor),
    current_user: Principal = Depends(get_current_user),
):
    await message_interactor.mark_read(current_user.id, message_id)
    return schemas.Envelope(message="Message marked as read")
