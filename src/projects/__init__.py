"""
Projects layer: 프로젝트 디스크립터 + 에셋 노트.

역할:
- 디스크립터 로드/저장/검증/초기화 (descriptor.py)
- 에셋 트리 스캔, 노트 병합 (assets.py)
- 생성/열기 흐름 (service.py)
"""

from .assets import find_asset, merge_notes, scan_assets, set_asset_notes
from .descriptor import (
    initialize_project,
    load_descriptor,
    sanitize_folder_name,
    save_descriptor,
    validate_and_build_descriptor,
)
from .service import create_project, get_project_assets, open_project, update_asset_notes

__all__ = [
    # descriptor
    "load_descriptor",
    "save_descriptor",
    "sanitize_folder_name",
    "validate_and_build_descriptor",
    "initialize_project",
    # assets
    "scan_assets",
    "merge_notes",
    "find_asset",
    "set_asset_notes",
    # service
    "create_project",
    "open_project",
    "get_project_assets",
    "update_asset_notes",
]
