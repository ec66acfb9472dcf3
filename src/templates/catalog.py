"""
템플릿 카탈로그: 디스크의 템플릿 폴더 스캔 + 레지스트리 검증.

구조:
templates/<template_id>/<version>/...

규칙:
- 레지스트리에 등록된 id만 포함
- 등록된 현재 버전 폴더가 없으면 템플릿 전체 제외 (에러 아님)
- 등록됐지만 디스크에 없는 템플릿은 결과에 없을 뿐 (에러 아님)
- OS 메타데이터 파일은 모든 레벨에서 정확한 이름 일치로 제외
"""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from src.core.paths import expand_home
from src.domain.constants import DEFAULT_EXCLUDED_FILES, ContentType
from src.domain.errors import ErrorCodes, TemplateError
from src.domain.schemas import ContentNode, TemplateEntry
from src.templates.registry import TemplateRegistry

logger = logging.getLogger(__name__)


def _sorted_entries(directory: Path) -> list[Path]:
    # 이름순 정렬: iterdir 순서는 파일시스템마다 다름
    return sorted(directory.iterdir(), key=lambda p: p.name)


def scan_contents(
    directory: Path,
    excluded_files: Iterable[str] = DEFAULT_EXCLUDED_FILES,
) -> list[ContentNode]:
    """
    폴더 내용을 재귀 스캔해 내용 트리 생성.

    Args:
        directory: 스캔할 폴더
        excluded_files: 제외할 파일명 (대소문자 구분, 정확히 일치)

    Returns:
        ContentNode 목록 (이름순)
    """
    excluded = frozenset(excluded_files)
    nodes = []
    for entry in _sorted_entries(directory):
        if entry.name in excluded:
            continue
        if entry.is_symlink() and entry.is_dir():
            # 심볼릭 링크 디렉터리는 따라가지 않음 (순환 방지)
            logger.debug(f"Skipping symlinked directory in template: {entry}")
            continue
        if entry.is_dir():
            nodes.append(
                ContentNode(
                    name=entry.name,
                    type=ContentType.DIRECTORY,
                    children=scan_contents(entry, excluded),
                )
            )
        else:
            nodes.append(ContentNode(name=entry.name, type=ContentType.FILE))
    return nodes


def list_templates(
    templates_root: str | Path,
    registry: TemplateRegistry,
    excluded_files: Iterable[str] = DEFAULT_EXCLUDED_FILES,
) -> list[TemplateEntry]:
    """
    사용 가능한 템플릿 목록.

    Args:
        templates_root: 템플릿 루트 폴더
        registry: 알려진 템플릿 id / 현재 버전
        excluded_files: 내용 스캔 시 제외할 파일명

    Returns:
        TemplateEntry 목록 (id 이름순)
    """
    root = expand_home(templates_root)
    if not root.is_dir():
        logger.warning(f"Template root {root} does not exist")
        return []

    results = []
    for template_dir in _sorted_entries(root):
        if not template_dir.is_dir():
            continue

        registered = registry.get(template_dir.name)
        if registered is None:
            logger.debug(f"Skipping unregistered template directory {template_dir}")
            continue

        versions = {p.name for p in template_dir.iterdir() if p.is_dir()}
        if registered.version not in versions:
            logger.warning(
                f"Template '{registered.id}' version {registered.version} "
                f"not found under {template_dir}"
            )
            continue

        version_dir = template_dir / registered.version
        results.append(
            TemplateEntry(
                id=registered.id,
                version=registered.version,
                path=version_dir,
                name=registered.name,
                description=registered.description,
                contents=scan_contents(version_dir, excluded_files),
            )
        )

    return results


def find_template(
    templates: Sequence[TemplateEntry],
    template_id: str,
    version: str,
) -> TemplateEntry:
    """
    카탈로그에서 템플릿 검색.

    Raises:
        TemplateError: TEMPLATE_NOT_FOUND, TEMPLATE_VERSION_NOT_FOUND
    """
    candidates = [t for t in templates if t.id == template_id]
    if not candidates:
        raise TemplateError(
            ErrorCodes.TEMPLATE_NOT_FOUND,
            f"Template '{template_id}' not found",
            template_id=template_id,
        )

    for entry in candidates:
        if entry.version == str(version):
            return entry

    raise TemplateError(
        ErrorCodes.TEMPLATE_VERSION_NOT_FOUND,
        f"Version {version} of template '{template_id}' not found",
        template_id=template_id,
        version=version,
        available=[t.version for t in candidates],
    )
