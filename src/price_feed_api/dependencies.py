"""FastAPI dependencies."""

from fastapi import Request

from price_feed.dependency_container import PriceFeedDependencyContainer


def get_container(request: Request) -> PriceFeedDependencyContainer:
    """Container created in the app lifespan."""
    return request.app.state.container
