# superchat/api/settings.py

from fastapi import APIRouter, Depends

from superchat.api.dependencies import get_current_principal, get_settings_interactor
from superchat.domain.entities import Principal
from superchat.infrastructure import schemas
from superchat.interactors.settings_interactor import SettingsInteractor

router = APIRouter()


@router.get("", response_model=schemas.Envelope)
async def read_settings(
    settings_interactor: SettingsInteractor = Depends(get_settings_interactor),
    principal: Principal = Depends(get_current_principal),
):
    settings = await settings_interactor.get_settings()
    return schemas.Envelope(
        message="Settings retrieved successfully", data={"settings": settings}
    )
