# superchat/infrastructure/seed.py
import logging

from superchat.gateways.admin_gateway import AdminGateway
from superchat.gateways.settings_gateway import SettingsGateway
from superchat.infrastructure.uow import UnitOfWork

logger = logging.getLogger("SuperChatAPI.seed")


async def seed_defaults(session_factory, security_service, config) -> None:
    """Create the app settings row and the bootstrap admin when they are missing."""
    async with session_factory() as session:
        uow = UnitOfWork(timeout=config.DB_TIMEOUT_SECONDS)
        settings_gateway = SettingsGateway(session, uow)
        admin_gateway = AdminGateway(session, uow)

        # creates the row on first read
        await settings_gateway.get_settings()

        if config.ADMIN_USERNAME and config.ADMIN_EMAIL and config.ADMIN_PASSWORD:
            existing = await admin_gateway.get_by_identifier(
                config.ADMIN_USERNAME
            ) or await admin_gateway.get_by_identifier(config.ADMIN_EMAIL)
            if not existing:
                await admin_gateway.create_admin(
                    config.ADMIN_USERNAME,
                    config.ADMIN_EMAIL,
                    security_service.get_password_hash(config.ADMIN_PASSWORD),
                )
                logger.info("Created bootstrap admin %s", config.ADMIN_USERNAME)

        await session.commit()
