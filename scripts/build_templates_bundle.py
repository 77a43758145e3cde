#!/usr/bin/env python3
"""
build_templates_bundle.py - shared 템플릿 번들을 파일로 내보내기

GET /templates.js 와 같은 내용을 정적 배포용 파일로 생성:
1. default.yaml (또는 --config) 로드
2. shared/ 디렉터리 scan + 컴파일
3. 번들 템플릿 렌더 → 출력 파일

사용법:
    # 기본 실행 (public/templates.js)
    uv run python scripts/build_templates_bundle.py

    # 출력 경로 지정
    uv run python scripts/build_templates_bundle.py --output dist/templates.js

    # 다른 설정 파일
    uv run python scripts/build_templates_bundle.py --config prod.yaml
"""

import argparse
import logging
import sys
from pathlib import Path

# src 패키지 임포트를 위한 경로 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core.config import load_config  # noqa: E402
from src.domain.errors import AppError  # noqa: E402
from src.templates.bundle import BundleRenderer  # noqa: E402
from src.templates.compiler import TemplateCompiler  # noqa: E402
from src.templates.registry import scan_templates  # noqa: E402

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def build_bundle(shared_dir: Path, bundle_template: Path) -> str:
    """shared 디렉터리 → 번들 스크립트 텍스트."""
    snapshot = scan_templates(shared_dir, TemplateCompiler())
    logger.info(f"Compiled {len(snapshot.templates)} templates: {', '.join(snapshot.template_ids)}")
    return BundleRenderer(bundle_template).render(snapshot.templates)


def write_bundle(content: str, output: Path) -> Path:
    """번들 저장 (임시 파일 → rename)."""
    output.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output.with_suffix(output.suffix + ".tmp")
    try:
        tmp_path.write_text(content, encoding="utf-8")
        tmp_path.replace(output)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return output


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="shared 템플릿 번들 생성")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="설정 파일 경로 (기본: default.yaml)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="출력 파일 경로 (기본: <static>/templates.js)",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
        content = build_bundle(config.shared_dir, config.bundle_template)
    except AppError as e:
        logger.error(f"번들 생성 실패: {e}")
        return 1

    output = args.output or config.static_dir / "templates.js"
    try:
        write_bundle(content, output)
    except OSError as e:
        logger.error(f"번들 저장 실패: {output}: {e}")
        return 1
    logger.info(f"저장됨: {output} ({len(content.encode('utf-8')) / 1024:.1f} KB)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
