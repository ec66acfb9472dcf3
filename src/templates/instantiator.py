"""
템플릿 인스턴스화: 템플릿 버전 폴더 → 프로젝트 폴더 복사.

규칙:
- 부모 폴더를 항상 자식(파일/하위 폴더)보다 먼저 생성
- 이미 있는 폴더는 건너뜀 (멱등)
- 파일은 바이트 그대로 복사
- 실패 시 재시도/롤백 없음: 이미 쓴 파일은 그대로 두고 예외 전파
"""

import logging
import os
import shutil
from collections.abc import Sequence
from pathlib import Path

from src.core.paths import expand_home, is_accessible_dir
from src.domain.errors import ErrorCodes, TemplateError
from src.domain.schemas import ContentNode, InstantiationResult, TemplateEntry
from src.templates.catalog import find_template

logger = logging.getLogger(__name__)


def _copy_nodes(
    nodes: Sequence[ContentNode],
    source_dir: Path,
    target_dir: Path,
    result: InstantiationResult,
) -> None:
    for node in nodes:
        source = source_dir / node.name
        target = target_dir / node.name
        if node.is_directory:
            target.mkdir(exist_ok=True)
            result.created_dirs.append(target)
            _copy_nodes(node.children, source, target, result)
        else:
            shutil.copyfile(source, target)
            result.copied_files.append(target)
            logger.debug(f"Copied {source} -> {target}")


def create_template_contents(
    target_dir: str | os.PathLike[str] | None,
    template_id: str | None,
    version: str | None,
    templates: Sequence[TemplateEntry],
) -> InstantiationResult:
    """
    템플릿 내용을 대상 폴더에 생성.

    카탈로그 스캔 시점의 내용 트리(TemplateEntry.contents)를 따라 복사하므로
    OS 메타데이터 파일은 이미 제외되어 있음.

    Args:
        target_dir: 프로젝트 폴더 (이미 존재해야 함)
        template_id: 템플릿 ID
        version: 템플릿 버전
        templates: list_templates로 로드한 카탈로그

    Returns:
        InstantiationResult (생성한 폴더, 복사한 파일)

    Raises:
        TemplateError: TARGET_DIR_REQUIRED, TARGET_DIR_NOT_FOUND,
            TEMPLATE_REQUIRED, TEMPLATE_VERSION_REQUIRED,
            TEMPLATE_NOT_FOUND, TEMPLATE_VERSION_NOT_FOUND
        OSError: 폴더 생성/파일 복사 실패
    """
    if target_dir is None:
        raise TemplateError(
            ErrorCodes.TARGET_DIR_REQUIRED,
            "The target directory must be specified",
        )

    target = expand_home(target_dir)
    if not is_accessible_dir(target):
        raise TemplateError(
            ErrorCodes.TARGET_DIR_NOT_FOUND,
            f"Target directory '{target}' does not exist or is not accessible",
            target_dir=str(target),
        )

    if template_id is None:
        raise TemplateError(
            ErrorCodes.TEMPLATE_REQUIRED,
            "The template must be specified",
        )

    if version is None:
        raise TemplateError(
            ErrorCodes.TEMPLATE_VERSION_REQUIRED,
            "The template version must be specified",
            template_id=template_id,
        )

    entry = find_template(templates, template_id, version)

    result = InstantiationResult(
        template_id=entry.id,
        version=entry.version,
        target_dir=target,
    )
    _copy_nodes(entry.contents, entry.path, target, result)

    logger.info(
        f"Created template '{entry.id}' v{entry.version} in {target}: "
        f"{len(result.created_dirs)} directories, {len(result.copied_files)} files"
    )
    return result
