"""
Page Routes: 서버 사이드 렌더 페이지.

- GET / → 고정 context + shared partial로 최상위 페이지 렌더
"""

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import HTMLResponse

from src.core.config import AppConfig
from src.domain.errors import AppError
from src.templates.page import PageRenderer
from src.templates.registry import SharedTemplateRegistry

router = APIRouter()


@router.get("/", response_class=HTMLResponse)
async def home_page(request: Request) -> HTMLResponse:
    """
    홈 페이지.

    shared 템플릿을 partial로 사용해 렌더한다 (RefreshGate 거치지 않음).
    클라이언트는 같은 템플릿을 /templates.js 로 받아 재렌더한다.
    """
    config: AppConfig = request.app.state.config
    registry: SharedTemplateRegistry = request.app.state.registry
    renderer: PageRenderer = request.app.state.page_renderer

    snapshot = registry.current()
    partials = snapshot.partials_for(config.page.partials)

    try:
        html = renderer.render(config.page.template, dict(config.page.context), partials)
    except AppError as e:
        raise HTTPException(status_code=500, detail={"code": e.code, "message": e.message}) from e

    return HTMLResponse(content=html)
