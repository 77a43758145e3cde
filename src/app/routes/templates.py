"""
Templates Routes: 사전 컴파일된 shared 템플릿 번들.

- GET /templates.js → RefreshGate (+ 필요 시 rebuild) → BundleRenderer
"""

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import Response

from src.domain.errors import AppError
from src.templates.bundle import BundleRenderer
from src.templates.registry import SharedTemplateRegistry

JAVASCRIPT_MEDIA_TYPE = "application/javascript"

router = APIRouter()


@router.get("/templates.js")
async def shared_templates_script(request: Request) -> Response:
    """
    shared 템플릿 번들 스크립트.

    development 모드에서는 요청마다 shared/ 를 다시 읽는다.
    rebuild 실패 시 registry가 이전 snapshot을 유지한다.
    """
    registry: SharedTemplateRegistry = request.app.state.registry
    renderer: BundleRenderer = request.app.state.bundle_renderer

    try:
        snapshot = registry.refresh()
        content = renderer.render(snapshot.templates)
    except AppError as e:
        raise HTTPException(status_code=500, detail={"code": e.code, "message": e.message}) from e

    return Response(content=content, media_type=JAVASCRIPT_MEDIA_TYPE)
