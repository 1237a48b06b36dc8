# superchat/interactors/settings_interactor.py
from superchat.gateways.interfaces import ISettingsGateway
from superchat.infrastructure import schemas


class SettingsInteractor:
    """Reads the app settings row on every call; nothing is cached in process."""

    def __init__(self, settings_gateway: ISettingsGateway):
        self.settings_gateway = settings_gateway

    async def get_settings(self) -> schemas.AppSettings:
        settings = await self.settings_gateway.get_settings()
        return schemas.AppSettings.model_validate(settings._model)

    async def update_settings(
        self, settings_update: schemas.AppSettingsUpdate
    ) -> schemas.AppSettings:
        settings = await self.settings_gateway.get_settings()
        updated = await self.settings_gateway.update_settings(settings, settings_update)
        return schemas.AppSettings.model_validate(updated._model)
