"""
Templates layer: shared 템플릿 컴파일/집계 모듈.

역할:
- mustache 컴파일 (compiler.py)
- shared/ 디렉터리 → snapshot (registry.py)
- 클라이언트 번들 생성 (bundle.py)
- 서버 사이드 페이지 렌더 (page.py)

주의: 폴더 구분
- src/templates/ → 코드 (이 모듈)
- views/ (루트) → 템플릿 소스 (layout, 번들 템플릿, shared/)
"""

from .bundle import BundleRenderer
from .compiler import TemplateCompiler
from .page import PageRenderer
from .registry import (
    CompiledTemplate,
    RefreshGate,
    RegistrySnapshot,
    SharedTemplateRegistry,
    scan_templates,
    should_rebuild,
)
from .sources import read_template_source, remove_byte_order_mark

__all__ = [
    # compiler
    "TemplateCompiler",
    # registry
    "SharedTemplateRegistry",
    "RegistrySnapshot",
    "CompiledTemplate",
    "RefreshGate",
    "scan_templates",
    "should_rebuild",
    # bundle / page
    "BundleRenderer",
    "PageRenderer",
    # sources
    "read_template_source",
    "remove_byte_order_mark",
]
