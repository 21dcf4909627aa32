import logging
from typing import Optional
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator, metrics
from prometheus_fastapi_instrumentator.metrics import Info
from prometheus_client import Counter

from personal_blog.config import Config, REQUEST_LATENCY_BUCKETS, load_config
from personal_blog.database import BlogDatabase
from personal_blog.exceptions import EntityNotFoundError, InvalidArgumentError
from personal_blog.repositories import CategoryRepository, PostRepository
from personal_blog.routes import categories, posts
from personal_blog.services import CategoryService, PostService

# --- 기본 로깅 ---
config = load_config()
logging.basicConfig(
    level=getattr(logging, config.server.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger('BlogServiceApp')

# Prometheus 메트릭 설정
# status 레이블은 2xx, 3xx, 4xx, 5xx 그룹으로 집계
http_requests_by_status = Counter(
    "blog_http_requests_total",
    "Total number of HTTP requests by status class",
    ("method", "status"),
)


def http_requests_by_status_metric(info: Info) -> None:
    status_code = info.response.status_code if info.response is not None else 500
    status_group = "unknown"
    if 200 <= status_code < 300:
        status_group = "2xx"
    elif 300 <= status_code < 400:
        status_group = "3xx"
    elif 400 <= status_code < 500:
        status_group = "4xx"
    elif 500 <= status_code < 600:
        status_group = "5xx"

    http_requests_by_status.labels(info.method, status_group).inc()


def configure_metrics(application: FastAPI) -> None:
    """Configure Prometheus request latency metrics with explicit buckets."""
    instrumentator = Instrumentator(excluded_handlers=["/metrics"])
    instrumentator.add(metrics.latency(buckets=REQUEST_LATENCY_BUCKETS))
    instrumentator.add(http_requests_by_status_metric)
    instrumentator.instrument(application).expose(application, include_in_schema=False)


async def handle_not_found(request: Request, exc: EntityNotFoundError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=404, content={"detail": str(exc)})


async def handle_invalid_argument(request: Request, exc: InvalidArgumentError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"detail": str(exc)})


def create_app(app_config: Optional[Config] = None) -> FastAPI:
    """Build the FastAPI application for the given configuration."""
    app_config = app_config or config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize and cleanup resources."""
        # Startup
        db = BlogDatabase(app_config.database)
        await db.initialize()
        category_repository = CategoryRepository(db)
        post_repository = PostRepository(db)
        app.state.db = db
        app.state.category_service = CategoryService(
            category_repository, logger=logging.getLogger('BlogServiceApp.categories')
        )
        app.state.post_service = PostService(
            post_repository,
            category_repository,
            default_author=app_config.blog.default_post_author,
            logger=logging.getLogger('BlogServiceApp.posts'),
        )
        logger.info("Blog service initialized: database ready")
        yield
        # Shutdown
        await db.close()
        logger.info("Blog service shutdown: database closed")

    app = FastAPI(title="Personal Blog API", version="1.0.0", lifespan=lifespan)

    # CORS 설정
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_config.api.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "X-Requested-With"],
    )

    app.add_exception_handler(EntityNotFoundError, handle_not_found)
    app.add_exception_handler(InvalidArgumentError, handle_invalid_argument)

    app.include_router(categories.router, prefix=app_config.api.base_path)
    app.include_router(posts.router, prefix=app_config.api.base_path)

    @app.get("/health")
    async def handle_health():
        """Kubernetes를 위한 헬스 체크 엔드포인트"""
        return {"status": "ok", "service": "blog-service"}

    if app_config.api.metrics_enabled:
        configure_metrics(app)

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    port = config.server.port
    logger.info(f"Blog Service starting on http://{config.server.host}:{port}")
    uvicorn.run(app, host=config.server.host, port=port)
