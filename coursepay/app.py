from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from coursepay.api.v1.routers import v1_router
from coursepay.core.settings import settings
from coursepay.core.logging import setup_logging

setup_logging()

app = FastAPI(title=settings.app_name, debug=settings.debug)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


app.include_router(v1_router)
