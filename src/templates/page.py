"""
Page Renderer: 최상위 페이지 템플릿 서버 사이드 렌더.

- views/<template_id>.mustache 를 찾아 context + partial로 렌더
- 없는 템플릿 → TemplateNotFoundError (HTTP 계층에서 500)
- cache=True (production) 이면 컴파일 결과 재사용
"""

import logging
from pathlib import Path
from typing import Any

from src.domain.errors import TemplateNotFoundError
from src.templates.compiler import RenderFunction, TemplateCompiler
from src.templates.sources import read_template_source

logger = logging.getLogger(__name__)

PAGE_EXTENSION = ".mustache"


class PageRenderer:
    """최상위 페이지 렌더러."""

    def __init__(
        self,
        views_dir: Path,
        compiler: TemplateCompiler | None = None,
        cache: bool = False,
    ):
        """
        Args:
            views_dir: 페이지 템플릿 디렉터리
            compiler: TemplateCompiler
            cache: 컴파일된 페이지 재사용 여부
        """
        self.views_dir = views_dir
        self.compiler = compiler or TemplateCompiler()
        self.cache = cache
        self._compiled: dict[str, RenderFunction] = {}

    def render(
        self,
        template_id: str,
        context: dict[str, Any],
        partials: dict[str, str],
    ) -> str:
        """
        페이지 렌더.

        Args:
            template_id: 템플릿 ID (확장자 제외, 예: "layout")
            context: 렌더 데이터
            partials: partial 이름 → 소스

        Returns:
            렌더된 HTML

        Raises:
            TemplateNotFoundError: 템플릿 없음
            TemplateSyntaxError: 문법 오류
        """
        return self._load(template_id)(context, partials)

    def _load(self, template_id: str) -> RenderFunction:
        if self.cache and template_id in self._compiled:
            return self._compiled[template_id]

        path = self._resolve(template_id)
        source = read_template_source(path)
        render = self.compiler.compile(source, name=template_id)
        logger.debug(f"Compiled page template '{template_id}' from {path}")

        if self.cache:
            self._compiled[template_id] = render
        return render

    def _resolve(self, template_id: str) -> Path:
        if (
            not template_id
            or "/" in template_id
            or "\\" in template_id
            or ".." in template_id
        ):
            raise TemplateNotFoundError(
                f"Invalid template id: {template_id!r}",
                template_id=template_id,
            )

        path = self.views_dir / f"{template_id}{PAGE_EXTENSION}"
        if not path.is_file():
            raise TemplateNotFoundError(
                f"Template '{template_id}' not found",
                template_id=template_id,
                views_dir=str(self.views_dir),
            )
        return path
