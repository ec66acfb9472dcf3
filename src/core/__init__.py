"""
Core layer: 파일시스템 안전 핵심 모듈.

역할:
- 원자적 JSON 쓰기, ID 발급, 경로 확장
"""

from .atomic import atomic_write_json, dumps_json
from .ids import generate_project_id, now_timestamp
from .paths import expand_home, is_accessible_dir

__all__ = [
    # atomic
    "atomic_write_json",
    "dumps_json",
    # ids
    "generate_project_id",
    "now_timestamp",
    # paths
    "expand_home",
    "is_accessible_dir",
]
