# superchat/main.py
import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool
from starlette.exceptions import HTTPException as StarletteHTTPException

from superchat.api import admin, auth, groups, messages, settings, sms, users
from superchat.config import AppConfig
from superchat.domain import errors
from superchat.infrastructure import models
from superchat.infrastructure.database import create_database
from superchat.infrastructure.request_logging import (
    RequestLoggingMiddleware,
    get_request_id,
)
from superchat.infrastructure.security import SecurityService
from superchat.infrastructure.seed import seed_defaults
from superchat.infrastructure.sms import get_sms_sender


def error_response(status_code: int, message: str, data=None) -> JSONResponse:
    content = {"error": True, "message": message}
    if data is not None:
        content["data"] = jsonable_encoder(data)
    return JSONResponse(status_code=status_code, content=content)


class Application:
    def __init__(self, config: AppConfig):
        self.config = config
        self.logger = self.setup_logger()
        engine_kwargs = {"echo": False}
        if config.DATABASE_URL.endswith(":memory:"):
            # one shared connection, otherwise every checkout sees an empty database
            engine_kwargs.update(
                poolclass=StaticPool, connect_args={"check_same_thread": False}
            )
        engine = create_async_engine(config.DATABASE_URL, **engine_kwargs)
        self.database = create_database(engine)
        self.security_service = SecurityService(config)
        self.sms_sender = get_sms_sender(config.SMS_PROVIDER, config.SMS_SENDER_ID)

    @asynccontextmanager
    async def lifespan(self, app: FastAPI):
        await self.database.connect()
        await seed_defaults(self.database.SessionLocal, self.security_service, self.config)
        self.logger.info("Database ready")
        yield
        await self.database.disconnect()

    def setup_logger(self):
        logger = logging.getLogger("SuperChatAPI")
        logger.setLevel(self.config.LOG_LEVEL.upper())

        if not logger.handlers:
            c_handler = logging.StreamHandler(sys.stdout)
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            )
            c_handler.setFormatter(formatter)
            logger.addHandler(c_handler)

        return logger

    def register_exception_handlers(self, app: FastAPI) -> None:
        logger = self.logger

        @app.exception_handler(errors.DomainError)
        async def domain_error_handler(request: Request, exc: errors.DomainError):
            if exc.is_server_fault:
                logger.error(
                    "[%s] %s on %s %s: %s",
                    get_request_id(request),
                    exc.kind,
                    request.method,
                    request.url.path,
                    exc,
                    exc_info=exc,
                )
                return error_response(exc.status_code, exc.default_message)
            return error_response(exc.status_code, exc.message)

        @app.exception_handler(RequestValidationError)
        async def validation_error_handler(request: Request, exc: RequestValidationError):
            details = [
                {
                    "field": ".".join(str(part) for part in err.get("loc", ())),
                    "message": err.get("msg"),
                }
                for err in exc.errors()
            ]
            return error_response(400, "Invalid request", {"errors": details})

        @app.exception_handler(StarletteHTTPException)
        async def http_error_handler(request: Request, exc: StarletteHTTPException):
            if exc.status_code == 404 and exc.detail == "Not Found":
                return error_response(404, "Route not found")
            return error_response(exc.status_code, str(exc.detail))

        @app.exception_handler(Exception)
        async def global_exception_handler(request: Request, exc: Exception):
            logger.error(
                "[%s] Unhandled error on %s %s",
                get_request_id(request),
                request.method,
                request.url.path,
                exc_info=exc,
            )
            return error_response(500, "Internal server error")

    def create_app(self) -> FastAPI:
        app = FastAPI(
            title=self.config.PROJECT_NAME,
            version=self.config.PROJECT_VERSION,
            description=self.config.PROJECT_DESCRIPTION,
            openapi_url=f"{self.config.API_PREFIX}/openapi.json",
            lifespan=self.lifespan,
        )

        app.state.config = self.config
        app.state.security_service = self.security_service
        app.state.sms_sender = self.sms_sender
        app.state.database = self.database
        app.state.logger = self.logger

        prefix = self.config.API_PREFIX
        app.include_router(auth.router, prefix=f"{prefix}/auth", tags=["auth"])
        app.include_router(users.router, prefix=f"{prefix}/users", tags=["users"])
        app.include_router(groups.router, prefix=f"{prefix}/groups", tags=["groups"])
        app.include_router(messages.router, prefix=f"{prefix}/messages", tags=["messages"])
        app.include_router(settings.router, prefix=f"{prefix}/settings", tags=["settings"])
        app.include_router(admin.router, prefix=f"{prefix}/admin", tags=["admin"])
        app.include_router(sms.router, prefix=f"{prefix}/sms", tags=["sms"])

        @app.get("/health")
        async def health():
            return {"status": "ok", "timestamp": models.utcnow().isoformat()}

        app.add_middleware(RequestLoggingMiddleware)
        self.register_exception_handlers(app)
        return app


def create():
    config = AppConfig()
    application = Application(config)
    app = application.create_app()
    application.logger.info("Application created and configured")

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create(), host="127.0.0.1", port=8000)
