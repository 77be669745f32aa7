"""
HTTP surface over ScheduleService. Serve with `uvicorn proftafla.api:app`.
"""
from contextlib import asynccontextmanager
from typing import List, Optional

import httpx
import structlog
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from .config import Config
from .errors import ProftaflaError
from .models import DivisionResult, Stats

logger = structlog.get_logger(__name__)


class SchoolSummary(BaseModel):
    name: str
    slug: str


class ClearResponse(BaseModel):
    cleared: bool


def create_app(service=None, config: Optional[Config] = None) -> FastAPI:
    """FastAPI app over a ScheduleService.

    Without a service one is built from `config` on startup and closed on
    shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = service is None
        if owned:
            from . import create_service
            app.state.service = create_service(config or Config())
        else:
            app.state.service = service
        try:
            yield
        finally:
            if owned:
                await app.state.service.close()

    app = FastAPI(title="Próftafla", lifespan=lifespan)

    @app.get("/", response_model=List[SchoolSummary])
    async def list_schools():
        return [SchoolSummary(name=s.name, slug=s.slug) for s in app.state.service.schools]

    @app.get("/stats")
    async def stats():
        try:
            result: Stats = await app.state.service.get_stats()
        except (ProftaflaError, httpx.HTTPError, ValueError) as e:
            logger.error("stats_failed", error=str(e))
            raise HTTPException(status_code=502, detail=f"Upstream error: {e}")
        return result.model_dump(by_alias=True)

    @app.post("/clear-cache", response_model=ClearResponse)
    async def clear_cache():
        return ClearResponse(cleared=await app.state.service.clear_cache())

    @app.get("/{slug}", response_model=DivisionResult)
    async def tests(slug: str):
        try:
            result = await app.state.service.get_tests(slug)
        except (ProftaflaError, httpx.HTTPError, ValueError) as e:
            logger.error("lookup_failed", slug=slug, error=str(e))
            raise HTTPException(status_code=502, detail=f"Upstream error: {e}")

        if result is None:
            raise HTTPException(status_code=404, detail="Svið fannst ekki")
        return result

    return app


app = create_app()
