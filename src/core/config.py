"""
애플리케이션 설정: default.yaml → AppConfig.

규칙:
- 실행 모드(development/production)는 설정값으로만 결정 (환경변수 읽지 않음)
- 상대 경로는 설정 파일 위치 기준으로 해석
- 설정 파일이 없으면 기본값 사용
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from src.domain.errors import ConfigError

# 프로젝트 루트 (default.yaml 위치)
PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "default.yaml"


class RunMode(str, Enum):
    """실행 모드."""
    DEVELOPMENT = "development"  # 요청마다 shared 템플릿 재빌드
    PRODUCTION = "production"    # 최초 빌드 후 불변


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    """최상위 섹션 (없거나 null이면 빈 dict). mapping이 아니면 ConfigError."""
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"{name} must be a mapping", value=section)
    return section


def _default_page_context() -> dict[str, Any]:
    return {
        "headline": "This is a server-side rendered headline",
        "bodyText": "This is some bodytext",
    }


@dataclass
class PageSettings:
    """GET / 렌더 설정."""
    template: str = "layout"
    partials: list[str] = field(default_factory=lambda: ["article"])
    context: dict[str, Any] = field(default_factory=_default_page_context)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PageSettings":
        defaults = cls()
        partials = data.get("partials", defaults.partials)
        if not isinstance(partials, list):
            raise ConfigError("page.partials must be a list", value=partials)
        context = data.get("context", defaults.context)
        if not isinstance(context, dict):
            raise ConfigError("page.context must be a mapping", value=context)

        return cls(
            template=str(data.get("template", defaults.template)),
            partials=[str(name) for name in partials],
            context=dict(context),
        )


@dataclass
class AppConfig:
    """애플리케이션 설정."""
    mode: RunMode = RunMode.DEVELOPMENT
    host: str = "127.0.0.1"
    port: int = 3000

    views_dir: Path = PROJECT_ROOT / "views"
    shared_dir: Path = PROJECT_ROOT / "views" / "shared"
    bundle_template: Path = PROJECT_ROOT / "views" / "shared_templates.js.j2"
    static_dir: Path = PROJECT_ROOT / "public"

    page: PageSettings = field(default_factory=PageSettings)

    @property
    def is_development(self) -> bool:
        return self.mode == RunMode.DEVELOPMENT

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path = PROJECT_ROOT) -> "AppConfig":
        """
        YAML 데이터에서 AppConfig 생성.

        Args:
            data: yaml.safe_load 결과
            base_dir: 상대 경로 해석 기준 디렉터리

        Raises:
            ConfigError: INVALID_CONFIG
        """
        app_section = _section(data, "app")
        paths = _section(data, "paths")
        page = _section(data, "page")

        mode_value = app_section.get("mode", RunMode.DEVELOPMENT.value)
        try:
            mode = RunMode(mode_value)
        except ValueError:
            raise ConfigError(
                f"Unknown run mode: {mode_value!r}",
                allowed=[m.value for m in RunMode],
            ) from None

        port_value = app_section.get("port", 3000)
        # bool은 int 서브클래스 (int(True) == 1)
        if isinstance(port_value, bool):
            raise ConfigError("app.port must be an integer", value=port_value)
        try:
            port = int(port_value)
        except (TypeError, ValueError):
            raise ConfigError("app.port must be an integer", value=port_value) from None

        def resolve(key: str, default: str) -> Path:
            path = Path(paths.get(key, default))
            return path if path.is_absolute() else base_dir / path

        return cls(
            mode=mode,
            host=str(app_section.get("host", "127.0.0.1")),
            port=port,
            views_dir=resolve("views", "views"),
            shared_dir=resolve("shared", "views/shared"),
            bundle_template=resolve("bundle_template", "views/shared_templates.js.j2"),
            static_dir=resolve("static", "public"),
            page=PageSettings.from_dict(page),
        )


def load_config(config_path: Path | None = None) -> AppConfig:
    """
    설정 파일 로드.

    Args:
        config_path: YAML 경로 (None이면 프로젝트 루트의 default.yaml)

    Returns:
        AppConfig (파일이 없으면 기본값)

    Raises:
        ConfigError: YAML 파싱 실패, 잘못된 값
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return AppConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse {config_path.name}: {e}", path=str(config_path)) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping", path=str(config_path))

    return AppConfig.from_dict(data, base_dir=config_path.parent)
