"""
Templates Routes: 템플릿 카탈로그 조회.

- GET /api/templates → 사용 가능한 템플릿 목록 (내용 트리 포함)
"""

from typing import Any

from fastapi import APIRouter, Request

from src.domain.schemas import TemplateEntry
from src.templates.catalog import list_templates

api_router = APIRouter()


def load_catalog(request: Request) -> list[TemplateEntry]:
    """요청마다 디스크를 다시 스캔 (프로세스 전역 캐시 없음)."""
    state = request.app.state
    return list_templates(state.templates_root, state.registry, state.excluded_files)


@api_router.get("")
async def get_templates(request: Request) -> dict[str, Any]:
    """템플릿 목록."""
    templates = load_catalog(request)
    return {"templates": [t.to_dict() for t in templates]}
