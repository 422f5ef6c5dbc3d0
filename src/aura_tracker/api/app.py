"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from aura_tracker.api.routes import router
from aura_tracker.app_logging import configure_logging
from aura_tracker.containers import AppContainer
from aura_tracker.domain.errors import (
    InvalidInputError,
    MissingTargetError,
    PartialUpdateError,
    ProfileExistsError,
    ProfileNotFoundError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        logger.warning("Rejected input on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(MissingTargetError)
    async def missing_target(request: Request, exc: MissingTargetError) -> JSONResponse:
        logger.warning("Profile target missing on %s: %s", request.url.path, exc.field)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc), "field": exc.field},
        )

    @app.exception_handler(ProfileNotFoundError)
    async def profile_not_found(
        request: Request, exc: ProfileNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ProfileExistsError)
    async def profile_exists(
        request: Request, exc: ProfileExistsError
    ) -> JSONResponse:
        logger.warning("Repeat onboarding refused on %s", request.url.path)
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc)},
        )

    @app.exception_handler(PartialUpdateError)
    async def partial_update(request: Request, exc: PartialUpdateError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": str(exc),
                "meal_id": str(exc.meal_id),
                "stage": exc.stage,
            },
        )

    return app
