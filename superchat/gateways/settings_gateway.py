# superchat/gateways/settings_gateway.py
from sqlalchemy import select

from superchat.gateways.base import BaseGateway
from superchat.gateways.interfaces import ISettingsGateway
from superchat.infrastructure import models, schemas
from superchat.infrastructure.uow import UoWModel


class SettingsGateway(BaseGateway, ISettingsGateway):
    models = (models.AppSettings,)

    async def get_settings(self) -> UoWModel:
        stmt = (
            select(models.AppSettings)
            .order_by(models.AppSettings.updated_at)
            .limit(1)
            .execution_options(populate_existing=True)
        )
        result = await self._execute(stmt)
        settings = result.scalar_one_or_none()
        if settings:
            return UoWModel(settings, self.uow)
        uow_settings = self.uow.register_new(models.AppSettings())
        await self.uow.commit()
        return uow_settings

    async def update_settings(
        self, settings: UoWModel, settings_update: schemas.AppSettingsUpdate
    ) -> UoWModel:
        for key, value in settings_update.model_dump(exclude_unset=True).items():
            setattr(settings, key, value)
        await self.uow.commit()
        return settings
