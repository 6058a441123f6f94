from __future__ import annotations

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from formsmith.config import Settings
from formsmith.protocols import Store
from formsmith.routes.forms import router as forms_router
from formsmith.storage import init_storage


def create_app(settings: Settings | None = None, storage: Store | None = None) -> FastAPI:
    settings = settings or Settings()
    storage = storage or init_storage(settings)

    app = FastAPI(
        title="formsmith",
        openapi_tags=[
            {"name": "forms", "description": "Form schemas"},
            {"name": "responses", "description": "Submitted responses"},
            {"name": "system", "description": "System"},
        ],
    )

    app.state.storage = storage
    app.state.settings = settings

    @app.exception_handler(HTTPException)
    async def error_envelope(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            {"success": False, "message": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    app.include_router(forms_router)

    return app
