"""
템플릿 소스 파일 읽기.

- UTF-8로 읽고 선두 BOM (U+FEFF) 1개 제거
- 읽기 실패 → FilesystemError
"""

from pathlib import Path

from src.domain.errors import FilesystemError

BYTE_ORDER_MARK = "\ufeff"


def remove_byte_order_mark(text: str) -> str:
    """선두 BOM 제거 (https://en.wikipedia.org/wiki/Byte_order_mark)."""
    if text.startswith(BYTE_ORDER_MARK):
        return text[1:]
    return text


def read_template_source(path: Path) -> str:
    """
    템플릿 파일 읽기.

    Args:
        path: 템플릿 파일 경로

    Returns:
        BOM이 제거된 소스

    Raises:
        FilesystemError: 파일 없음, 권한, 디코딩 실패
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FilesystemError(
            f"Failed to read template file: {path.name}",
            path=str(path),
            reason=str(e),
        ) from e
    return remove_byte_order_mark(text)


def template_name(path: Path) -> str:
    """파일명에서 확장자 제거 (마지막 '.' 앞까지)."""
    return path.stem


def list_template_files(directory: Path) -> list[Path]:
    """
    디렉터리의 템플릿 파일 목록 (비재귀, 이름순).

    숨김 파일과 하위 디렉터리는 제외.

    Raises:
        FilesystemError: 디렉터리 없음/읽기 실패
    """
    try:
        entries = list(directory.iterdir())
    except OSError as e:
        raise FilesystemError(
            f"Failed to list template directory: {directory}",
            path=str(directory),
            reason=str(e),
        ) from e

    files = [
        entry for entry in entries
        if entry.is_file() and not entry.name.startswith(".")
    ]
    files.sort(key=lambda p: p.name)
    return files
