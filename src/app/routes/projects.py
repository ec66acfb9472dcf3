"""
Projects Routes: 프로젝트 생성/조회, 에셋 노트.

- POST /api/projects → 프로젝트 생성 (템플릿 선택 가능)
- GET  /api/projects?path= → 디스크립터 조회
- GET  /api/projects/assets?path= → 에셋 트리 + 노트
- PUT  /api/projects/assets/notes → 에셋 노트 교체
"""

from typing import Any

from fastapi import APIRouter, Body, Form, HTTPException, Request

from src.app.routes.templates import load_catalog
from src.domain.errors import ErrorCodes, ProjectError
from src.projects.descriptor import load_descriptor
from src.projects.service import create_project, get_project_assets, update_asset_notes

api_router = APIRouter()

NOT_FOUND_CODES = {
    ErrorCodes.PROJECT_DIR_NOT_FOUND,
    ErrorCodes.ASSET_NOT_FOUND,
    ErrorCodes.TEMPLATE_NOT_FOUND,
    ErrorCodes.TEMPLATE_VERSION_NOT_FOUND,
}


def _http_error(e: ProjectError) -> HTTPException:
    status_code = 404 if e.code in NOT_FOUND_CODES else 400
    return HTTPException(status_code=status_code, detail={"code": e.code, "message": e.message})


@api_router.post("")
async def create(
    request: Request,
    directory: str = Form(...),
    type: str = Form("new"),
    name: str | None = Form(None),
    template_id: str | None = Form(None),
    template_version: str | None = Form(None),
) -> dict[str, Any]:
    """
    프로젝트 생성.

    1. 요청 검증 → 디스크립터 생성
    2. 폴더 생성 + 디스크립터 저장
    3. 템플릿 선택 시 내용 복사
    """
    template = None
    templates = []
    if template_id:
        if not template_version:
            # 버전 생략 → 레지스트리의 현재 버전
            registered = request.app.state.registry.get(template_id)
            if registered is None:
                raise HTTPException(
                    status_code=404,
                    detail={
                        "code": ErrorCodes.TEMPLATE_NOT_FOUND,
                        "message": f"Template '{template_id}' is not registered",
                    },
                )
            template_version = registered.version
        template = {"id": template_id, "version": template_version}
        templates = load_catalog(request)

    try:
        descriptor = create_project(
            {"directory": directory, "name": name, "type": type},
            template=template,
            templates=templates,
        )
    except ProjectError as e:
        raise _http_error(e) from e

    return {
        "success": True,
        "project": descriptor.to_dict(),
    }


@api_router.get("")
async def get_project(path: str) -> dict[str, Any]:
    """디스크립터 조회."""
    try:
        descriptor = load_descriptor(path)
    except ProjectError as e:
        raise _http_error(e) from e

    if descriptor is None:
        raise HTTPException(
            status_code=404,
            detail={
                "code": ErrorCodes.PROJECT_DIR_NOT_FOUND,
                "message": f"No project found at '{path}'",
            },
        )
    return descriptor.to_dict()


@api_router.get("/assets")
async def get_assets(request: Request, path: str) -> dict[str, Any]:
    """에셋 트리 (디스크 스캔 + 저장된 노트)."""
    try:
        return get_project_assets(path, request.app.state.excluded_files)
    except ProjectError as e:
        raise _http_error(e) from e


@api_router.put("/assets/notes")
async def put_asset_notes(
    request: Request,
    path: str = Body(...),
    uri: str = Body(...),
    notes: list[dict[str, Any]] = Body(...),
) -> dict[str, Any]:
    """에셋 하나의 노트 교체."""
    try:
        assets = update_asset_notes(path, uri, notes, request.app.state.excluded_files)
    except ProjectError as e:
        raise _http_error(e) from e

    return {"success": True, "assets": assets}
