"""
프로젝트 디스크립터 관리: 로드/저장/검증/초기화.

규칙:
- 디스크립터 = <project_path>/.project-descriptor.json
- 모든 파일시스템 작업 전에 `~` 확장
- 디렉터리 없음 → None (정상), 디스크립터 파싱 실패 → ProjectError (치명적)
- 저장은 디렉터리를 만들지 않음 (생성은 initialize_project의 책임)
- 기존 프로젝트의 id 재발급 금지: 초기화는 멱등
"""

import json
import logging
import os
import unicodedata
from collections.abc import Mapping
from dataclasses import replace
from pathlib import Path
from typing import Any

from src.core.atomic import atomic_write_json
from src.core.ids import generate_project_id, now_timestamp
from src.core.paths import expand_home, is_accessible_dir
from src.domain.constants import (
    FOLDER_NAME_ILLEGAL_CHARS,
    FOLDER_NAME_MAX_LENGTH,
    PROJECT_DESCRIPTOR_FILENAME,
    PROJECT_FORMAT_VERSION,
    ProjectType,
)
from src.domain.errors import ErrorCodes, ProjectError
from src.domain.schemas import ProjectDescriptor, TemplateRef, ValidationReport

logger = logging.getLogger(__name__)

PathLike = str | os.PathLike[str]


def get_descriptor_path(project_dir: Path) -> Path:
    """디스크립터 파일 경로 반환."""
    return project_dir / PROJECT_DESCRIPTOR_FILENAME


# =============================================================================
# Load / Save
# =============================================================================


def load_descriptor(path: PathLike) -> ProjectDescriptor | None:
    """
    프로젝트 디스크립터 로드.

    Args:
        path: 프로젝트 루트 경로 (`~` 허용)

    Returns:
        ProjectDescriptor, 디렉터리 또는 디스크립터 파일이 없으면 None

    Raises:
        ProjectError: DESCRIPTOR_CORRUPT (JSON 파싱 실패, 객체가 아님)
    """
    project_dir = expand_home(path)
    if not is_accessible_dir(project_dir):
        return None

    descriptor_path = get_descriptor_path(project_dir)
    if not descriptor_path.is_file():
        return None

    try:
        data = json.loads(descriptor_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ProjectError(
            ErrorCodes.DESCRIPTOR_CORRUPT,
            f"Project descriptor could not be parsed: {e}",
            path=str(descriptor_path),
        ) from e

    if not isinstance(data, dict):
        raise ProjectError(
            ErrorCodes.DESCRIPTOR_CORRUPT,
            "Project descriptor must be a JSON object",
            path=str(descriptor_path),
        )

    descriptor = ProjectDescriptor.from_dict(data)
    if not descriptor.is_current_format:
        # 마이그레이션하지 않음: 호출자가 is_current_format으로 판단
        logger.warning(
            f"Project descriptor {descriptor_path} has formatVersion "
            f"{descriptor.format_version!r} (current: {PROJECT_FORMAT_VERSION!r})"
        )
    return descriptor


def save_descriptor(path: PathLike, descriptor: ProjectDescriptor | None) -> Path:
    """
    프로젝트 디스크립터 저장 (기존 파일 덮어쓰기).

    Args:
        path: 프로젝트 루트 경로 (`~` 허용, 이미 존재해야 함)
        descriptor: 저장할 디스크립터 (id 필수)

    Returns:
        저장된 디스크립터 파일 경로

    Raises:
        ProjectError: INVALID_DESCRIPTOR, PROJECT_DIR_NOT_FOUND
    """
    if descriptor is None or not descriptor.id:
        raise ProjectError(
            ErrorCodes.INVALID_DESCRIPTOR,
            "The project descriptor must be specified with at least an id",
        )

    if not descriptor.is_current_format:
        raise ProjectError(
            ErrorCodes.INVALID_DESCRIPTOR,
            f"formatVersion {descriptor.format_version!r} does not match "
            f"the current version {PROJECT_FORMAT_VERSION!r}",
            id=descriptor.id,
        )

    project_dir = expand_home(path)
    if not is_accessible_dir(project_dir):
        raise ProjectError(
            ErrorCodes.PROJECT_DIR_NOT_FOUND,
            f"Project directory '{project_dir}' does not exist or is not accessible",
            path=str(project_dir),
        )

    descriptor_path = get_descriptor_path(project_dir)
    atomic_write_json(descriptor_path, descriptor.to_dict())
    logger.debug(f"Saved project descriptor {descriptor_path}")
    return descriptor_path


# =============================================================================
# Folder Name
# =============================================================================


def _strip_edges(value: str) -> str:
    """앞뒤 공백과 마침표를 더 이상 바뀌지 않을 때까지 제거."""
    previous = None
    while value != previous:
        previous = value
        value = value.strip().strip(".")
    return value


def _truncate(value: str, limit: int) -> str:
    """결합 문자 시퀀스 중간에서 자르지 않도록 limit 이하로 자름."""
    if len(value) <= limit:
        return value

    cut = limit
    while cut > 0 and unicodedata.combining(value[cut]):
        cut -= 1
    return value[:cut] if cut > 0 else value[:limit]


def sanitize_folder_name(name: str | None) -> str:
    """
    표시 이름 → 폴더명 변환.

    - 금지 문자 제거: \\ / : * ? " < > | 및 제어 문자
    - 앞뒤 공백/마침표 반복 제거
    - 최대 255자

    표시 이름(name) 자체는 절대 변경하지 않음. 멱등.

    Args:
        name: 프로젝트 표시 이름

    Returns:
        폴더명으로 사용 가능한 문자열 (입력이 비면 '')
    """
    if not name:
        return ""

    sanitized = "".join(
        c for c in name if c not in FOLDER_NAME_ILLEGAL_CHARS and ord(c) >= 32
    )
    sanitized = _strip_edges(sanitized)
    sanitized = _truncate(sanitized, FOLDER_NAME_MAX_LENGTH)
    # 잘린 끝이 공백/마침표일 수 있음
    return _strip_edges(sanitized)


# =============================================================================
# Validation
# =============================================================================


def _new_descriptor(name: str, path: str) -> ProjectDescriptor:
    return ProjectDescriptor(
        id=generate_project_id(),
        name=name,
        path=path,
        format_version=PROJECT_FORMAT_VERSION,
        last_accessed=now_timestamp(),
        favorite=False,
    )


def validate_and_build_descriptor(
    request: Mapping[str, Any] | None,
) -> ValidationReport:
    """
    프로젝트 생성 요청 검증 및 디스크립터 생성.

    request 형식: {"directory": ..., "name": ..., "type": "new" | "existing"}

    - new: path = directory(`~` 확장) / sanitize_folder_name(name), name은 원본 유지
    - existing: path = directory 그대로, name = 경로의 마지막 구성요소

    Args:
        request: 생성 요청

    Returns:
        ValidationReport (유효하면 details='')
    """
    if request is None:
        return ValidationReport(
            is_valid=False,
            details="No project information was provided for validation",
        )

    raw_type = request.get("type")
    try:
        project_type = ProjectType(raw_type)
    except ValueError:
        return ValidationReport(
            is_valid=False,
            details=f"An unknown project type ({raw_type}) was specified.",
        )

    directory = request.get("directory")
    if not directory:
        return ValidationReport(
            is_valid=False,
            details="No project directory was specified.",
        )

    if project_type == ProjectType.NEW:
        name = request.get("name") or ""
        folder_name = sanitize_folder_name(name)
        if not folder_name:
            return ValidationReport(
                is_valid=False,
                details=f"The project name ({name}) cannot be used as a folder name.",
            )
        path = str((expand_home(directory) / folder_name).absolute())
        descriptor = _new_descriptor(name, path)
    else:
        path = os.fspath(directory)
        descriptor = _new_descriptor(expand_home(path).name, path)

    return ValidationReport(is_valid=True, details="", descriptor=descriptor)


# =============================================================================
# Initialization
# =============================================================================


def to_template_ref(template: TemplateRef | Mapping[str, Any] | None) -> TemplateRef | None:
    """
    템플릿 정보 → TemplateRef.

    id와 version이 모두 있을 때만 생성, 나머지 필드는 버림.
    """
    if template is None:
        return None

    if isinstance(template, TemplateRef):
        template_id, version = template.id, template.version
    else:
        template_id, version = template.get("id"), template.get("version")

    if template_id in (None, "") or version in (None, ""):
        return None
    return TemplateRef(id=template_id, version=version)


def initialize_project(
    descriptor: ProjectDescriptor | None,
    template: TemplateRef | Mapping[str, Any] | None = None,
) -> ProjectDescriptor:
    """
    프로젝트 폴더 초기화.

    - 폴더가 있고 id가 있는 디스크립터가 이미 있으면: 아무것도 하지 않음
    - 폴더가 없으면: 재귀 생성 (실패 시 OSError 그대로 전파)
    - 디스크립터 저장 (template은 id/version 모두 있을 때만 포함)

    Args:
        descriptor: validate_and_build_descriptor로 만든 디스크립터
        template: 선택한 템플릿 ({"id", "version"})

    Returns:
        저장된 디스크립터 (no-op이면 디스크에 있던 디스크립터)

    Raises:
        ProjectError: INVALID_DESCRIPTOR
        OSError: 폴더 생성 실패
    """
    if descriptor is None or not descriptor.id or not descriptor.path:
        raise ProjectError(
            ErrorCodes.INVALID_DESCRIPTOR,
            "The project descriptor must have an id and a path",
        )

    project_dir = expand_home(descriptor.path).absolute()

    if project_dir.is_dir():
        existing = load_descriptor(project_dir)
        if existing is not None and existing.id:
            logger.info(f"Project already initialized at {project_dir} (id={existing.id})")
            return existing
    else:
        project_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created project directory {project_dir}")

    to_save = replace(
        descriptor,
        path=str(project_dir),
        format_version=PROJECT_FORMAT_VERSION,
        template=to_template_ref(template) or descriptor.template,
        extra=dict(descriptor.extra),
    )
    save_descriptor(project_dir, to_save)
    logger.info(f"Initialized project '{to_save.name}' at {project_dir} (id={to_save.id})")
    return to_save
