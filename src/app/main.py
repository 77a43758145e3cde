"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 직접: uv run python -m src.app.main  (default.yaml의 host/port 사용)

기동 시 shared 템플릿을 1회 빌드한다. 실패하면 앱이 시작되지 않는다.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from src.app.routes import pages, templates
from src.core.config import AppConfig, RunMode, load_config
from src.templates.bundle import BundleRenderer
from src.templates.compiler import TemplateCompiler
from src.templates.page import PageRenderer
from src.templates.registry import RefreshGate, SharedTemplateRegistry

logger = logging.getLogger(__name__)


# =============================================================================
# App Factory
# =============================================================================

def create_app(config: AppConfig | None = None) -> FastAPI:
    """
    FastAPI 앱 생성.

    Args:
        config: 애플리케이션 설정 (None이면 default.yaml)

    Returns:
        FastAPI 인스턴스 (lifespan에서 registry 빌드)
    """
    if config is None:
        config = load_config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        애플리케이션 생명주기 관리.

        시작 시: 번들 템플릿 컴파일, shared 템플릿 최초 빌드 (실패 시 치명적)
        """
        compiler = TemplateCompiler()
        registry = SharedTemplateRegistry(
            config.shared_dir,
            compiler=compiler,
            gate=RefreshGate(config.mode),
        )
        registry.rebuild()

        app.state.registry = registry
        app.state.bundle_renderer = BundleRenderer(config.bundle_template)
        app.state.page_renderer = PageRenderer(
            config.views_dir,
            compiler=compiler,
            cache=config.mode == RunMode.PRODUCTION,
        )
        logger.info(f"Shared templates server started in {config.mode.value} mode")

        yield

    app = FastAPI(
        title="Shared Templates Server",
        description="서버 렌더 + 클라이언트용 사전 컴파일 mustache 템플릿",
        version="0.1.0",
        debug=config.is_development,
        lifespan=lifespan,
    )

    app.state.config = config

    app.include_router(pages.router, tags=["Pages"])
    app.include_router(templates.router, tags=["Templates"])

    @app.get("/health")
    async def health() -> dict[str, str]:
        """헬스 체크."""
        return {"status": "ok"}

    # Static files (JS, CSS)
    if config.static_dir.exists():
        app.mount("/static", StaticFiles(directory=config.static_dir), name="static")

    return app


app = create_app()


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    settings: AppConfig = app.state.config
    uvicorn.run(app, host=settings.host, port=settings.port)
