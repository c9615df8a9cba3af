import asyncio
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, PlainTextResponse, Response

from nutricatalog.api.routes import router as api_router
from nutricatalog.core.config import Settings, load_settings
from nutricatalog.core.logging_config import get_logger, setup_logging
from nutricatalog.services.cache import TTLCache
from nutricatalog.services.catalog_service import CatalogService
from nutricatalog.services.dispatcher import PageDispatcher
from nutricatalog.services.render_strategy import RenderStrategy, choose_render_strategy
from nutricatalog.services.renderer import DocumentRenderer
from nutricatalog.services.sitemap import build_robots_txt, build_sitemap_urls
from nutricatalog.services.sources.base import FoodSource, FoodSourceError
from nutricatalog.services.sources.local import LocalFoodSource

logger = get_logger(__name__)


def create_app(settings: Optional[Settings] = None, source: Optional[FoodSource] = None) -> FastAPI:
    settings = settings or load_settings()
    setup_logging(settings.log_level)

    source = source or LocalFoodSource(settings.foods_data_path)
    cache = TTLCache(default_ttl_seconds=settings.cache_default_ttl_seconds)
    catalog = CatalogService(source, cache, settings)
    renderer = DocumentRenderer(settings)
    dispatcher = PageDispatcher(catalog, renderer, settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        sweeper = None
        if settings.cache_sweep_enabled:
            sweeper = asyncio.create_task(cache.run_cleanup_loop(settings.cache_sweep_interval_seconds))
        logger.info(f"Serving {settings.base_url} ({settings.environment}) from {source.name} source")
        yield
        if sweeper is not None:
            sweeper.cancel()
            try:
                await sweeper
            except asyncio.CancelledError:
                pass

    app = FastAPI(title="Nutrition Catalog", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.cache = cache
    app.state.catalog = catalog
    app.state.dispatcher = dispatcher

    if settings.is_development:
        @app.middleware("http")
        async def choose_renderer(request: Request, call_next):
            strategy = choose_render_strategy(request.url.path, request.headers.get("user-agent"))
            if strategy is RenderStrategy.CLIENT:
                return HTMLResponse(renderer.render_shell(request.url.path))
            if strategy is RenderStrategy.SERVER:
                logger.debug(f"Crawler request, server rendering {request.url.path}")
            return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        request_id = str(uuid.uuid4())
        start = time.time()
        response = await call_next(request)
        duration_ms = (time.time() - start) * 1000.0
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} "
            f"{duration_ms:.1f}ms request_id={request_id}"
        )
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(FoodSourceError)
    async def food_source_error_handler(request: Request, exc: FoodSourceError):
        logger.error(f"Food source failure: {exc}")
        return JSONResponse(
            status_code=502,
            content={
                "error_code": "FOOD_SOURCE_FAILURE",
                "message": "Failed to read from the food catalog.",
                "source": exc.source,
            }
        )

    app.include_router(api_router)

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    @app.get("/robots.txt", response_class=PlainTextResponse)
    def robots_txt():
        return build_robots_txt(settings)

    @app.get("/sitemap.xml")
    async def sitemap_xml():
        try:
            groups = await catalog.get_category_groups()
            foods = await catalog.get_sitemap_foods()
            xml = renderer.render_sitemap(build_sitemap_urls(settings, groups, foods))
        except Exception:
            logger.exception("Failed to build sitemap")
            return PlainTextResponse("Server Error", status_code=500)
        return Response(content=xml, media_type="application/xml")

    # Unknown API paths answer in JSON instead of reaching the page renderer
    @app.get("/api/{rest:path}", include_in_schema=False)
    def api_not_found(rest: str):
        return JSONResponse(
            status_code=404,
            content={"error_code": "NOT_FOUND", "message": f"No API endpoint at /api/{rest}"},
        )

    @app.get("/{full_path:path}", response_class=HTMLResponse, include_in_schema=False)
    async def render_page(full_path: str, request: Request):
        page = await dispatcher.dispatch(full_path, dict(request.query_params))
        return HTMLResponse(page.html, status_code=page.status_code)

    return app


app = create_app()
