"""
Core layer: 설정 로드.

역할:
- default.yaml → AppConfig
- 실행 모드 (development / production)
"""

from .config import (
    DEFAULT_CONFIG_PATH,
    PROJECT_ROOT,
    AppConfig,
    PageSettings,
    RunMode,
    load_config,
)

__all__ = [
    "PROJECT_ROOT",
    "DEFAULT_CONFIG_PATH",
    "AppConfig",
    "PageSettings",
    "RunMode",
    "load_config",
]
