from contextlib import asynccontextmanager

from fastapi import FastAPI

from price_feed import __version__
from price_feed.config.state import get_config
from price_feed.dependency_container import PriceFeedDependencyContainer
from price_feed.infrastructure.observability import setup_logging
from price_feed_api.health import router as health_router
from price_feed_api.routes.price_feed import router as price_feed_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_config()
    setup_logging(level=settings.logging.level, json_logs=settings.logging.json_logs)
    container = PriceFeedDependencyContainer(settings)
    await container.startup()
    app.state.container = container
    try:
        yield
    finally:
        await container.shutdown()


def create_app() -> FastAPI:
    app = FastAPI(title="Price Feed API", version=__version__, lifespan=lifespan)
    app.include_router(health_router, prefix="")
    app.include_router(price_feed_router, prefix="")

    @app.get("/")
    async def root():
        return {"message": "Price Feed API is running"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
