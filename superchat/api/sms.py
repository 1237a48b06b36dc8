# superchat/api/sms.py

from fastapi import APIRouter, Depends, Query

from superchat.api.dependencies import Pagination, get_sms_interactor, require_admin
from superchat.domain.entities import Principal
from superchat.infrastructure import schemas
from superchat.interactors.sms_interactor import SmsInteractor

router = APIRouter()


@router.post("/send", response_model=schemas.Envelope)
async def send_sms(
    sms: schemas.SmsSend,
    sms_interactor: SmsInteractor = Depends(get_sms_interactor),
    admin: Principal = Depends(require_admin),
):
    log = await sms_interactor.send_sms(sms.phone_number, sms.message)
    message = "SMS sent successfully" if log.status == "sent" else "SMS delivery failed"
    return schemas.Envelope(message=message, data={"sms": log})


@router.get("/logs", response_model=schemas.Envelope)
async def read_sms_logs(
    pagination: Pagination = Depends(),
    search: str | None = Query(None, description="Match on phone number or text"),
    sms_interactor: SmsInteractor = Depends(get_sms_interactor),
    admin: Principal = Depends(require_admin),
):
    page = await sms_interactor.list_logs(pagination.page, pagination.limit, search)
    return schemas.Envelope(message="SMS logs retrieved successfully", data=page.as_data())
