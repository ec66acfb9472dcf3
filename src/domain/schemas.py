"""
Data schemas for the project workspace.

규칙:
- 디스크립터 파일 키는 camelCase (formatVersion, lastAccessed)
- 알 수 없는 키는 extra에 보관 → 저장 시 그대로 되돌려 씀
- 트리 노드는 자식을 소유 (공유 가변 상태 없음)
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from src.domain.constants import PROJECT_FORMAT_VERSION, ContentType

# =============================================================================
# Project Descriptor
# =============================================================================

_DESCRIPTOR_KEYS = (
    "formatVersion",
    "id",
    "name",
    "path",
    "lastAccessed",
    "favorite",
    "template",
)


@dataclass
class TemplateRef:
    """프로젝트가 생성된 템플릿 (id + version)."""

    id: Any
    version: Any

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "version": self.version}


@dataclass
class ProjectDescriptor:
    """
    프로젝트 디스크립터 (.project-descriptor.json).

    id는 생성 시 한 번만 발급, 이후 변경 금지.
    format_version 불일치는 마이그레이션하지 않고 그대로 보관.
    """

    id: str = ""
    name: str = ""
    path: str = ""
    format_version: str = PROJECT_FORMAT_VERSION
    last_accessed: str = ""
    favorite: bool = False
    template: TemplateRef | None = None

    # 위 필드 외의 키 (tags, assets 등)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def is_current_format(self) -> bool:
        return self.format_version == PROJECT_FORMAT_VERSION

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "formatVersion": self.format_version,
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "lastAccessed": self.last_accessed,
            "favorite": self.favorite,
        }
        if self.template is not None:
            data["template"] = self.template.to_dict()
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectDescriptor":
        template = data.get("template")
        template_ref = None
        if isinstance(template, dict):
            template_ref = TemplateRef(id=template.get("id"), version=template.get("version"))

        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            path=data.get("path") or "",
            format_version=data.get("formatVersion", ""),
            last_accessed=data.get("lastAccessed", ""),
            favorite=bool(data.get("favorite", False)),
            template=template_ref,
            extra={k: v for k, v in data.items() if k not in _DESCRIPTOR_KEYS},
        )


@dataclass
class ValidationReport:
    """프로젝트 생성 요청 검증 결과."""

    is_valid: bool
    details: str = ""
    descriptor: ProjectDescriptor | None = None


# =============================================================================
# Template Schemas
# =============================================================================

@dataclass
class ContentNode:
    """템플릿 내용 트리 노드 (notes 없음)."""

    name: str
    type: ContentType
    children: list["ContentNode"] = field(default_factory=list)

    @property
    def is_directory(self) -> bool:
        return self.type == ContentType.DIRECTORY

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "type": self.type.value}
        if self.is_directory:
            data["children"] = [c.to_dict() for c in self.children]
        return data


@dataclass
class TemplateEntry:
    """
    템플릿 카탈로그 항목.

    디스크에 실제로 존재하는 현재 버전 하나만 표현.
    """

    id: str
    version: str
    path: Path  # <templates_root>/<id>/<version>
    name: str = ""
    description: str = ""
    contents: list[ContentNode] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "version": self.version,
            "name": self.name,
            "description": self.description,
            "contents": [c.to_dict() for c in self.contents],
        }


@dataclass
class InstantiationResult:
    """템플릿 복사 결과."""

    template_id: str
    version: str
    target_dir: Path
    created_dirs: list[Path] = field(default_factory=list)
    copied_files: list[Path] = field(default_factory=list)
