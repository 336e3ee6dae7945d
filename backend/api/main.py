"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
or:       python -m api.main
"""
import logging
import time
from pathlib import Path
from typing import Optional, Union

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.routes import books
from db import init_db
from settings import settings

logger = logging.getLogger("api.access")


def create_app(db_file: Optional[Union[str, Path]] = None) -> FastAPI:
    """Build the app with its own books repository over ``db_file``."""
    app = FastAPI(
        title="Library API",
        description="A simple FastAPI Library API",
        version="1.0.0",
        docs_url="/api-docs",
    )
    app.state.books_repo = init_db(db_file)

    # CORS middleware for browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """One access log line per request: method, path, status, elapsed ms."""
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            logger.info(
                "%s %s %s %.3f ms",
                request.method,
                request.url.path,
                status_code,
                elapsed_ms,
            )

    app.include_router(books.router, prefix="/books", tags=["books"])

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("The server is running on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
