"""
Domain Constants: 프로젝트 워크스페이스 전역 상수.

파일명 정책, 경로 상수, 폴더명 정리 규칙 등 시스템 전반에서 사용되는 값들.
"""

from enum import Enum

# =============================================================================
# Project Descriptor (프로젝트 디스크립터)
# =============================================================================
# <project_path>/
# ├── .project-descriptor.json   # 프로젝트 메타데이터 (id, name, ...)
# └── ...                        # 사용자 파일 (assets)

PROJECT_DESCRIPTOR_FILENAME = ".project-descriptor.json"

# 디스크립터 스키마 버전. 쓰기 시 항상 이 값, 읽기 시 불일치는 경고만.
PROJECT_FORMAT_VERSION = "1"


class ProjectType(str, Enum):
    """프로젝트 생성 요청 타입."""

    NEW = "new"  # 새 폴더 생성
    EXISTING = "existing"  # 기존 폴더를 프로젝트로 등록


# =============================================================================
# Folder Name Policy (폴더명 정리 규칙)
# =============================================================================
# 대부분의 파일시스템에서 경로 구성요소 길이 제한은 255

FOLDER_NAME_MAX_LENGTH = 255
FOLDER_NAME_ILLEGAL_CHARS = frozenset('\\/:*?"<>|')

# =============================================================================
# Template Directory Structure (템플릿 디렉토리 구조)
# =============================================================================
# templates/
# ├── registry.yaml          # 등록된 템플릿 목록 (id → 현재 버전)
# └── <template_id>/
#     └── <version>/         # 이 폴더의 내용이 새 프로젝트로 복사됨

TEMPLATE_REGISTRY_FILENAME = "registry.yaml"

# OS가 자동 생성하는 파일 + 빈 폴더 보존용 .keep (정확한 이름 일치, 대소문자 구분)
DEFAULT_EXCLUDED_FILES = (".DS_Store", "Thumbs.db", "desktop.ini", ".keep")


class ContentType(str, Enum):
    """트리 노드 타입."""

    FILE = "file"
    DIRECTORY = "directory"
