"""
Bundle Renderer: 컴파일된 템플릿 목록 → 클라이언트 스크립트.

번들 템플릿(Jinja2)은 기동 시 1회 컴파일. 같은 입력 → 같은 출력.
"""

from collections.abc import Sequence
from pathlib import Path

import jinja2

from src.domain.errors import TemplateRenderError, TemplateSyntaxError
from src.templates.registry import CompiledTemplate
from src.templates.sources import read_template_source


def create_environment() -> jinja2.Environment:
    """JS 출력용 Jinja2 환경 (HTML escape 없음)."""
    return jinja2.Environment(
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=jinja2.StrictUndefined,
    )


class BundleRenderer:
    """
    /templates.js 생성기.

    템플릿 변수:
        templates: [{id, script, last}, ...] (last는 구분자 결정용)
    """

    def __init__(self, template_path: Path):
        """
        Args:
            template_path: 번들 템플릿 파일 (views/shared_templates.js.j2)

        Raises:
            FilesystemError: 읽기 실패
            TemplateSyntaxError: Jinja2 문법 오류
        """
        self.template_path = template_path
        source = read_template_source(template_path)
        try:
            self._template = create_environment().from_string(source)
        except jinja2.TemplateSyntaxError as e:
            raise TemplateSyntaxError(
                f"Invalid bundle template: {e.message}",
                template=template_path.name,
                line=e.lineno,
            ) from e

    def render(self, templates: Sequence[CompiledTemplate]) -> str:
        """
        컴파일된 템플릿 목록 → 스크립트 텍스트.

        Raises:
            TemplateRenderError: 번들 템플릿 렌더 실패 (정의되지 않은 변수 등)
        """
        try:
            return self._template.render(
                templates=[template.to_dict() for template in templates]
            )
        except jinja2.TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render bundle template: {e.message}",
                template=self.template_path.name,
            ) from e
