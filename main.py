import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from config import DATABASE_URL, LOG_LEVEL
from database import Database
from router import router

logger = logging.getLogger(__name__)


def create_app(database_url: str | None = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        database = Database(database_url or DATABASE_URL)
        await database.create_all()
        app.state.database = database
        try:
            yield
        finally:
            await database.dispose()
            logger.info("Database connections released")

    app = FastAPI(title="Expense Tracker API", lifespan=lifespan)
    app.include_router(router, prefix="/api", tags=["expenses"])

    @app.get("/")
    def home():
        return {"message": "Welcome to Expense Tracker API"}

    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )
    uvicorn.run(app, host="127.0.0.1", port=8000)
