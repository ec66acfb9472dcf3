"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload
- 프로덕션: uv run uvicorn src.app.main:app
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from fastapi import FastAPI

# Routes
from src.app.routes import projects, templates
from src.domain.constants import DEFAULT_EXCLUDED_FILES, TEMPLATE_REGISTRY_FILENAME
from src.templates.registry import load_registry

PROJECT_ROOT = Path(__file__).parent.parent.parent

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = PROJECT_ROOT / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


def resolve_path(value: str | None, default: Path) -> Path:
    """설정의 상대 경로는 프로젝트 루트 기준."""
    if not value:
        return default
    path = Path(value).expanduser()
    return path if path.is_absolute() else PROJECT_ROOT / path


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 설정 로드, 템플릿 레지스트리 로드
    """
    # Startup
    config = load_config()
    paths = config.get("paths", {})

    app.state.config = config
    app.state.templates_root = resolve_path(
        paths.get("templates_root"), PROJECT_ROOT / "templates"
    )
    app.state.registry = load_registry(
        resolve_path(
            paths.get("registry"), app.state.templates_root / TEMPLATE_REGISTRY_FILENAME
        )
    )
    app.state.excluded_files = tuple(
        config.get("templates", {}).get("excluded_files", DEFAULT_EXCLUDED_FILES)
    )

    yield


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="Project Workspace",
    description="프로젝트 폴더 생성, 템플릿 적용, 에셋 노트 관리",
    version="0.1.0",
    lifespan=lifespan,
)


# =============================================================================
# Routes
# =============================================================================

app.include_router(
    templates.api_router, prefix="/api/templates", tags=["Templates API"]
)
app.include_router(projects.api_router, prefix="/api/projects", tags=["Projects API"])


# =============================================================================
# Root Endpoints
# =============================================================================


@app.get("/")
async def root() -> dict[str, Any]:
    """엔드포인트 목록."""
    return {
        "message": "Project Workspace",
        "endpoints": {
            "templates": "/api/templates",
            "projects": "/api/projects",
        },
    }


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.app.main:app",
        host="127.0.0.1",
        port=8000,
        reload=True,
    )
