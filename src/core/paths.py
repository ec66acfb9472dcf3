"""
경로 유틸리티: 홈 디렉터리 확장, 접근 가능 여부 확인.

모든 파일시스템 작업 전에 `~` 확장을 거쳐야 함.
"""

import os
from pathlib import Path


def expand_home(path: str | os.PathLike[str]) -> Path:
    """
    경로 앞의 `~`를 현재 사용자 홈 디렉터리로 확장.

    Args:
        path: 원본 경로 (예: ~/Projects/Demo)

    Returns:
        확장된 Path
    """
    return Path(os.path.expanduser(os.fspath(path)))


def is_accessible_dir(path: Path) -> bool:
    """디렉터리가 존재하고 읽기/탐색 가능한지 확인."""
    return path.is_dir() and os.access(path, os.R_OK | os.X_OK)
