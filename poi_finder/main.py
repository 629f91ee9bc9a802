# poi_finder/main.py

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from poi_finder.api.v1 import routes_health, routes_nearest
from poi_finder.core.config import settings
from poi_finder.core.exceptions import NearestNotFoundError, PlacesLookupError
from poi_finder.core.logger import logger


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Finds the nearest point of interest to a coordinate and a route to it.",
    )

    # Routers
    app.include_router(routes_health.router, prefix="", tags=["health"])
    app.include_router(routes_nearest.router, prefix="", tags=["nearest"])

    @app.exception_handler(NearestNotFoundError)
    async def not_found_handler(request: Request, exc: NearestNotFoundError) -> JSONResponse:
        logger.info(f"No result for {request.url.path}: {exc}")
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(PlacesLookupError)
    async def upstream_handler(request: Request, exc: PlacesLookupError) -> JSONResponse:
        logger.error(f"Places lookup failed for {request.url.path}: {exc}")
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(Exception)
    async def unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
        """
        Keep 500s as JSON so the frontend can display them.
        """
        logger.opt(exception=exc).error(f"Unhandled exception on {request.url.path}")
        return JSONResponse(status_code=500, content={"detail": "Internal Server Error"})

    return app


app = create_app()


def run() -> None:
    """
    Serve the app with uvicorn (entry point of the `poi-finder` script).
    """
    logger.info(f"Starting {settings.APP_NAME} on {settings.HOST}:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
