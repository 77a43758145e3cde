"""
Shared Template Registry: shared/ 디렉터리 → RegistrySnapshot.

규칙:
- snapshot = (컴파일된 템플릿 목록, partial 맵) : 항상 같은 scan에서 생성
- 교체는 참조 1개 swap (필드 단위 수정 금지)
- rebuild 실패 시 이전 snapshot 유지 (fail-safe)
- development: 요청마다 rebuild / production: 최초 1회만
"""

import logging
import threading
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from types import MappingProxyType
from typing import Any

from src.core.config import RunMode
from src.domain.errors import REBUILD_ERRORS, DuplicateTemplateError
from src.templates.compiler import TemplateCompiler
from src.templates.sources import list_template_files, read_template_source, template_name

logger = logging.getLogger(__name__)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class CompiledTemplate:
    """번들용 컴파일된 템플릿 레코드."""
    id: str
    script: str
    last: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "script": self.script, "last": self.last}


@dataclass(frozen=True)
class RegistrySnapshot:
    """한 번의 scan 결과 (불변)."""
    templates: tuple[CompiledTemplate, ...]
    partials: Mapping[str, str]
    generation: int = 0
    built_at: str = ""

    @property
    def template_ids(self) -> list[str]:
        return [template.id for template in self.templates]

    def partials_for(self, names: Iterable[str]) -> dict[str, str]:
        """요청한 이름 중 존재하는 partial만 반환 (없는 이름은 경고)."""
        selected: dict[str, str] = {}
        for name in names:
            if name in self.partials:
                selected[name] = self.partials[name]
            else:
                logger.warning(f"Partial '{name}' is not in the shared templates")
        return selected


def scan_templates(
    directory: Path,
    compiler: TemplateCompiler,
    generation: int = 0,
) -> RegistrySnapshot:
    """
    디렉터리를 읽어 새 snapshot 생성.

    1. 파일 목록 (이름순)
    2. 이름 = 확장자 제거, 내용 = UTF-8 + BOM 제거
    3. partial 맵 등록
    4. 직렬화 컴파일
    5. 마지막 레코드만 last=True

    Args:
        directory: shared 템플릿 디렉터리
        compiler: TemplateCompiler
        generation: snapshot 세대 번호

    Returns:
        RegistrySnapshot

    Raises:
        FilesystemError: 읽기 실패
        TemplateSyntaxError: 컴파일 실패
        DuplicateTemplateError: 같은 이름의 파일 2개 이상
    """
    partials: dict[str, str] = {}
    records: list[CompiledTemplate] = []

    for path in list_template_files(directory):
        name = template_name(path)
        if name in partials:
            raise DuplicateTemplateError(
                f"Template name '{name}' is derived from more than one file",
                template=name,
                path=str(path),
            )

        source = read_template_source(path)
        partials[name] = source
        records.append(
            CompiledTemplate(
                id=name,
                script=compiler.compile(source, as_string=True, name=name),
            )
        )

    if records:
        last = records[-1]
        records[-1] = CompiledTemplate(id=last.id, script=last.script, last=True)

    return RegistrySnapshot(
        templates=tuple(records),
        partials=MappingProxyType(partials),
        generation=generation,
        built_at=datetime.now(UTC).isoformat(),
    )


# =============================================================================
# Refresh Gate
# =============================================================================

def should_rebuild(snapshot: RegistrySnapshot | None, mode: RunMode) -> bool:
    """snapshot이 없거나 development 모드면 rebuild."""
    return snapshot is None or mode == RunMode.DEVELOPMENT


@dataclass(frozen=True)
class RefreshGate:
    """요청 단위 rebuild 여부 판단. 모드는 설정에서 명시적으로 주입."""
    mode: RunMode = RunMode.DEVELOPMENT

    def should_rebuild(self, snapshot: RegistrySnapshot | None) -> bool:
        return should_rebuild(snapshot, self.mode)


# =============================================================================
# Registry
# =============================================================================

class SharedTemplateRegistry:
    """
    shared 템플릿 snapshot 소유자.

    앱 기동 시 1개 생성되어 app.state로 핸들러에 전달.
    가변 상태는 _snapshot 참조 하나뿐.
    """

    def __init__(
        self,
        directory: Path,
        compiler: TemplateCompiler | None = None,
        gate: RefreshGate | None = None,
    ):
        """
        Args:
            directory: shared 템플릿 디렉터리
            compiler: TemplateCompiler (기본: 새 인스턴스)
            gate: RefreshGate (기본: development)
        """
        self.directory = directory
        self.compiler = compiler or TemplateCompiler()
        self.gate = gate or RefreshGate()
        self._snapshot: RegistrySnapshot | None = None
        self._generation = 0
        # 동시 rebuild 방지 (threadpool 핸들러 대비)
        self._lock = threading.Lock()

    @property
    def snapshot(self) -> RegistrySnapshot | None:
        """현재 snapshot (없으면 None)."""
        return self._snapshot

    def current(self) -> RegistrySnapshot:
        """
        현재 snapshot.

        Raises:
            RuntimeError: 아직 한 번도 빌드되지 않음
        """
        snapshot = self._snapshot
        if snapshot is None:
            raise RuntimeError("Shared templates have not been built yet")
        return snapshot

    def rebuild(self) -> RegistrySnapshot:
        """
        디렉터리를 다시 읽고 snapshot 교체.

        실패 시 에러 전파 (기동 시 치명적). 이전 snapshot은 그대로.
        """
        with self._lock:
            return self._rebuild_locked()

    def refresh(self) -> RegistrySnapshot:
        """
        RefreshGate에 따라 필요하면 rebuild 후 snapshot 반환.

        rebuild 실패 시:
        - 이전 snapshot 있음 → 경고 로그 후 이전 snapshot 반환
        - 이전 snapshot 없음 → 에러 전파
        """
        with self._lock:
            previous = self._snapshot
            if previous is not None and not self.gate.should_rebuild(previous):
                return previous

            try:
                return self._rebuild_locked()
            except REBUILD_ERRORS as e:
                if previous is None:
                    raise
                logger.warning(
                    f"Shared template rebuild failed, keeping generation "
                    f"{previous.generation}: {e}"
                )
                return previous

    def _rebuild_locked(self) -> RegistrySnapshot:
        generation = self._generation + 1
        snapshot = scan_templates(self.directory, self.compiler, generation=generation)

        # 단일 참조 swap
        self._snapshot = snapshot
        self._generation = generation

        logger.info(
            f"Built {len(snapshot.templates)} shared templates from {self.directory} "
            f"(generation {generation})"
        )
        return snapshot
