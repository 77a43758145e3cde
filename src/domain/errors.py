"""
Error definitions for shared templates.

규칙:
- 조용한 실패 금지 → 코드가 붙은 AppError로 명시적 실패
- 기동 시 에러 → 치명적 (프로세스 시작 안 함)
- 요청 중 rebuild 에러 → 이전 snapshot 유지 (registry가 흡수)
- 렌더 시 템플릿 없음 → 해당 요청만 500
"""

from typing import Any


class AppError(Exception):
    """
    애플리케이션 공통 에러.

    Usage:
        raise TemplateSyntaxError("unclosed tag", template="article")
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Compile ===
    TEMPLATE_SYNTAX_ERROR = "TEMPLATE_SYNTAX_ERROR"

    # === Registry ===
    FILESYSTEM_ERROR = "FILESYSTEM_ERROR"
    DUPLICATE_TEMPLATE = "DUPLICATE_TEMPLATE"

    # === Render ===
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    TEMPLATE_RENDER_ERROR = "TEMPLATE_RENDER_ERROR"

    # === Config ===
    INVALID_CONFIG = "INVALID_CONFIG"


# =============================================================================
# Exceptions
# =============================================================================

class TemplateSyntaxError(AppError):
    """템플릿 소스 문법 오류 (기동 시 치명적, 런타임 rebuild 시 skip)."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(ErrorCodes.TEMPLATE_SYNTAX_ERROR, message, **context)


class FilesystemError(AppError):
    """디렉터리/파일 읽기 실패. 정책은 TemplateSyntaxError와 동일."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(ErrorCodes.FILESYSTEM_ERROR, message, **context)


class DuplicateTemplateError(AppError):
    """한 번의 scan에서 두 파일이 같은 템플릿 이름을 만든 경우."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(ErrorCodes.DUPLICATE_TEMPLATE, message, **context)


class TemplateNotFoundError(AppError):
    """렌더 요청된 템플릿 ID가 없음 → HTTP 500."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(ErrorCodes.TEMPLATE_NOT_FOUND, message, **context)


class TemplateRenderError(AppError):
    """번들 템플릿 렌더 실패 (정의되지 않은 변수 등) → HTTP 500."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(ErrorCodes.TEMPLATE_RENDER_ERROR, message, **context)


class ConfigError(AppError):
    """설정 파일 오류."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(ErrorCodes.INVALID_CONFIG, message, **context)


# rebuild 실패로 간주되는 에러 (fail-safe 대상)
REBUILD_ERRORS: tuple[type[AppError], ...] = (
    TemplateSyntaxError,
    FilesystemError,
    DuplicateTemplateError,
)
