"""
FastAPI application entrypoint for the booth service.

Run with: uvicorn api.main:app
"""
import logging
from fastapi import FastAPI

from api.routes import router
from photobooth.config import Settings

logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title="Photobooth Kiosk API", version="1.0.0")
    app.include_router(router)

    @app.get("/health")
    def health() -> dict:
        """
        Health check endpoint.

        Returns:
            dict: status plus the configured output size.
        """
        s = Settings()
        return {"status": "ok", "output": [s.OUTPUT_WIDTH, s.OUTPUT_HEIGHT]}

    logger.debug("[api] app created")
    return app


app = create_app()
