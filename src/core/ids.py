"""
ID 생성: project_id, 타임스탬프

규칙:
- project_id는 생성 시 한 번만 발급 (UUID v4, 하이픈 포함 36자)
- 기존 프로젝트의 id 재발급 금지
"""

import uuid
from datetime import UTC, datetime


def generate_project_id() -> str:
    """
    Project ID 생성.

    고유성 보장: UUID v4
    포맷: xxxxxxxx-xxxx-4xxx-xxxx-xxxxxxxxxxxx

    Returns:
        project_id 문자열
    """
    return str(uuid.uuid4())


def now_timestamp() -> str:
    """현재 시각 (UTC, ISO-8601)."""
    return datetime.now(UTC).isoformat()
