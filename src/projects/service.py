"""
프로젝트 생성/열기 흐름.

create_project: 검증 → 초기화 → (새로 초기화된 경우만) 템플릿 복사
open_project: 디스크립터 로드, 없으면 기존 폴더로 초기화
에셋 노트는 디스크립터의 "assets" 키에 저장된 트리에서 병합.
"""

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from src.domain.constants import DEFAULT_EXCLUDED_FILES, ProjectType
from src.domain.errors import ErrorCodes, ProjectError
from src.domain.schemas import ProjectDescriptor, TemplateEntry, TemplateRef
from src.projects.assets import AssetNode, merge_notes, scan_assets, set_asset_notes
from src.projects.descriptor import (
    initialize_project,
    load_descriptor,
    save_descriptor,
    to_template_ref,
    validate_and_build_descriptor,
)
from src.templates.catalog import find_template
from src.templates.instantiator import create_template_contents

logger = logging.getLogger(__name__)

ASSETS_KEY = "assets"


def create_project(
    request: Mapping[str, Any] | None,
    template: TemplateRef | Mapping[str, Any] | None = None,
    templates: Sequence[TemplateEntry] = (),
) -> ProjectDescriptor:
    """
    프로젝트 생성.

    템플릿은 폴더를 만들기 전에 카탈로그에서 먼저 확인 (fail-fast).
    이미 초기화된 프로젝트면 템플릿을 다시 복사하지 않음.

    Args:
        request: {"directory", "name", "type"}
        template: {"id", "version"} (선택)
        templates: list_templates로 로드한 카탈로그

    Returns:
        저장된 디스크립터

    Raises:
        ProjectError: INVALID_PROJECT 및 하위 단계 에러
    """
    report = validate_and_build_descriptor(request)
    if not report.is_valid or report.descriptor is None:
        raise ProjectError(ErrorCodes.INVALID_PROJECT, report.details)

    template_ref = to_template_ref(template)
    entry = None
    if template_ref is not None:
        entry = find_template(templates, template_ref.id, template_ref.version)

    descriptor = initialize_project(report.descriptor, template_ref)
    if descriptor.id != report.descriptor.id:
        # 기존 디스크립터 유지 (no-op)
        return descriptor

    if entry is not None:
        create_template_contents(descriptor.path, entry.id, entry.version, templates)
    return descriptor


def open_project(path: str) -> ProjectDescriptor:
    """
    기존 폴더를 프로젝트로 열기.

    디스크립터가 있으면 그대로 반환, 없으면 existing 타입으로 초기화.
    """
    descriptor = load_descriptor(path)
    if descriptor is not None and descriptor.id:
        return descriptor

    report = validate_and_build_descriptor(
        {"directory": path, "type": ProjectType.EXISTING.value}
    )
    if not report.is_valid or report.descriptor is None:
        raise ProjectError(ErrorCodes.INVALID_PROJECT, report.details)
    return initialize_project(report.descriptor)


def _require_descriptor(path: str) -> ProjectDescriptor:
    descriptor = load_descriptor(path)
    if descriptor is None:
        raise ProjectError(
            ErrorCodes.PROJECT_DIR_NOT_FOUND,
            f"No project found at '{path}'",
            path=path,
        )
    return descriptor


def get_project_assets(
    path: str,
    excluded_files: Iterable[str] = DEFAULT_EXCLUDED_FILES,
) -> AssetNode:
    """
    현재 디스크의 에셋 트리 + 저장된 노트.

    Returns:
        notes가 채워진 에셋 트리
    """
    descriptor = _require_descriptor(path)
    # 디스크립터가 실제로 로드된 폴더 기준 (이동/복사된 프로젝트 포함)
    scanned = scan_assets(path, excluded_files)
    persisted = descriptor.extra.get(ASSETS_KEY) or {}
    return merge_notes(scanned, persisted)


def update_asset_notes(
    path: str,
    uri: str,
    notes: list[Any],
    excluded_files: Iterable[str] = DEFAULT_EXCLUDED_FILES,
) -> AssetNode:
    """
    에셋 하나의 notes를 교체하고 트리 전체를 디스크립터에 저장.

    Raises:
        ProjectError: PROJECT_DIR_NOT_FOUND, ASSET_NOT_FOUND
    """
    descriptor = _require_descriptor(path)
    assets = get_project_assets(path, excluded_files)
    assets = set_asset_notes(assets, uri, notes)

    descriptor.extra[ASSETS_KEY] = assets
    save_descriptor(path, descriptor)
    logger.info(f"Updated notes for asset {uri} ({len(notes)} notes)")
    return assets
