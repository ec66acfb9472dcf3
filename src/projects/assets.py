"""
프로젝트 에셋 트리: 디스크 스캔 + 노트 병합.

에셋 노드 형식 (JSON 호환 dict):
    {"uri": "/abs/path", "type": "file" | "directory", "children": [...], "notes": [...]}

규칙:
- 스캔 결과에는 notes가 없음
- 병합은 순수 함수: 입력 트리 변경 금지, 새 트리 반환
- 구조는 스캔 트리가 우선 (디스크에서 사라진 노드는 버림, 새 노드는 notes=[])
- 노드 식별자 = uri
"""

import copy
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from src.core.paths import expand_home
from src.domain.constants import (
    DEFAULT_EXCLUDED_FILES,
    PROJECT_DESCRIPTOR_FILENAME,
    ContentType,
)
from src.domain.errors import ErrorCodes, ProjectError

logger = logging.getLogger(__name__)

AssetNode = dict[str, Any]


# =============================================================================
# Scan
# =============================================================================


def _scan_node(path: Path, excluded: frozenset[str]) -> AssetNode:
    # 심볼릭 링크 디렉터리는 따라가지 않음 (순환 방지)
    if path.is_dir() and not path.is_symlink():
        children = [
            _scan_node(child, excluded)
            # 이름순 정렬: iterdir 순서는 파일시스템마다 다름
            for child in sorted(path.iterdir(), key=lambda p: p.name)
            if child.name not in excluded
        ]
        return {"uri": str(path), "type": ContentType.DIRECTORY.value, "children": children}
    return {"uri": str(path), "type": ContentType.FILE.value}


def scan_assets(
    project_dir: str | Path,
    excluded_files: Iterable[str] = DEFAULT_EXCLUDED_FILES,
) -> AssetNode:
    """
    프로젝트 폴더를 스캔해 에셋 트리 생성.

    디스크립터 파일과 OS 메타데이터 파일은 제외.

    Args:
        project_dir: 프로젝트 루트 (`~` 허용)
        excluded_files: 제외할 파일명 (정확히 일치)

    Returns:
        루트 에셋 노드 (uri = 절대 경로, notes 없음)
    """
    root = expand_home(project_dir).absolute()
    if not root.is_dir():
        raise ProjectError(
            ErrorCodes.PROJECT_DIR_NOT_FOUND,
            f"Project directory '{root}' does not exist",
            path=str(root),
        )

    excluded = frozenset(excluded_files) | {PROJECT_DESCRIPTOR_FILENAME}
    tree = _scan_node(root, excluded)
    logger.debug(f"Scanned assets under {root}")
    return tree


# =============================================================================
# Merge
# =============================================================================


def _index_by_uri(children: Any) -> dict[Any, Mapping[str, Any]]:
    index: dict[Any, Mapping[str, Any]] = {}
    for child in children or []:
        if isinstance(child, Mapping) and "uri" in child:
            index.setdefault(child["uri"], child)
    return index


def _merge_node(
    node: Mapping[str, Any],
    persisted: Mapping[str, Any] | None,
) -> AssetNode:
    merged: AssetNode = {k: v for k, v in node.items() if k not in ("children", "notes")}

    notes = persisted.get("notes") if persisted is not None else None
    merged["notes"] = copy.deepcopy(list(notes)) if notes is not None else []

    children = node.get("children")
    if children is not None:
        persisted_children = _index_by_uri(
            persisted.get("children") if persisted is not None else None
        )
        merged["children"] = [
            _merge_node(child, persisted_children.get(child.get("uri")))
            for child in children
        ]
    return merged


def merge_notes(
    assets: Mapping[str, Any] | None,
    assets_with_notes: Mapping[str, Any] | None,
) -> AssetNode:
    """
    스캔한 에셋 트리에 저장된 노트를 병합.

    두 루트는 같은 프로젝트 루트로 간주해 바로 짝지음.
    자식부터는 uri가 같은 노드끼리 짝지어 notes 복사, 없으면 [].
    결과의 구조와 자식 순서는 assets를 그대로 따름.

    Args:
        assets: 디스크에서 새로 스캔한 트리 (notes 없음)
        assets_with_notes: 이전에 저장된 트리 (notes 포함)

    Returns:
        notes가 채워진 새 트리

    Raises:
        ProjectError: ASSETS_REQUIRED, ASSETS_WITH_NOTES_REQUIRED
    """
    if assets is None:
        raise ProjectError(
            ErrorCodes.ASSETS_REQUIRED,
            "The assets object must be specified",
        )
    if assets_with_notes is None:
        raise ProjectError(
            ErrorCodes.ASSETS_WITH_NOTES_REQUIRED,
            "The assets object with notes must be specified",
        )

    return _merge_node(assets, assets_with_notes)


# =============================================================================
# Lookup / Update
# =============================================================================


def find_asset(tree: Mapping[str, Any], uri: str) -> Mapping[str, Any] | None:
    """uri로 에셋 노드 검색 (없으면 None)."""
    stack = [tree]
    while stack:
        node = stack.pop()
        if node.get("uri") == uri:
            return node
        stack.extend(reversed(node.get("children") or []))
    return None


def set_asset_notes(tree: Mapping[str, Any], uri: str, notes: list[Any]) -> AssetNode:
    """
    특정 에셋의 notes를 교체한 새 트리 반환.

    Raises:
        ProjectError: ASSET_NOT_FOUND
    """
    updated: AssetNode = copy.deepcopy(dict(tree))
    node = find_asset(updated, uri)
    if node is None:
        raise ProjectError(
            ErrorCodes.ASSET_NOT_FOUND,
            f"Asset '{uri}' was not found",
            uri=uri,
        )
    node["notes"] = copy.deepcopy(notes)  # type: ignore[index]
    return updated
