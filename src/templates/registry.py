"""
템플릿 레지스트리: 어떤 template_id / 버전이 "알려진" 것인지 정의.

하드코딩 대신 registry.yaml로 주입 (테스트에서는 from_dict로 합성).

registry.yaml 예시:
    templates:
      - id: PROJECT-BASIC
        name: Basic Project
        version: "1"
        description: 코드/데이터/문서 폴더 구성
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.domain.errors import ErrorCodes, TemplateError


@dataclass
class RegisteredTemplate:
    """레지스트리에 등록된 템플릿 (현재 버전)."""

    id: str
    version: str
    name: str = ""
    description: str = ""


@dataclass
class TemplateRegistry:
    """등록된 템플릿 목록 (id → RegisteredTemplate, 등록 순서 유지)."""

    templates: dict[str, RegisteredTemplate] = field(default_factory=dict)

    def get(self, template_id: str) -> RegisteredTemplate | None:
        return self.templates.get(template_id)

    def __contains__(self, template_id: object) -> bool:
        return template_id in self.templates

    def __len__(self) -> int:
        return len(self.templates)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "TemplateRegistry":
        """
        dict → TemplateRegistry.

        Raises:
            TemplateError: REGISTRY_INVALID (id/version 누락, 중복 id)
        """
        entries = (data or {}).get("templates") or []
        if not isinstance(entries, list):
            raise TemplateError(
                ErrorCodes.REGISTRY_INVALID,
                "'templates' must be a list",
            )

        templates: dict[str, RegisteredTemplate] = {}
        for index, entry in enumerate(entries):
            if not isinstance(entry, dict) or not entry.get("id") or not entry.get("version"):
                raise TemplateError(
                    ErrorCodes.REGISTRY_INVALID,
                    f"Registry entry #{index} must define 'id' and 'version'",
                    index=index,
                )

            template_id = str(entry["id"])
            if template_id in templates:
                raise TemplateError(
                    ErrorCodes.REGISTRY_INVALID,
                    f"Template '{template_id}' is registered more than once",
                    template_id=template_id,
                )

            # YAML에서 version: 1 → int 이므로 문자열로 통일 (폴더명과 비교)
            templates[template_id] = RegisteredTemplate(
                id=template_id,
                version=str(entry["version"]),
                name=entry.get("name", template_id),
                description=entry.get("description", ""),
            )

        return cls(templates=templates)


def load_registry(registry_path: Path) -> TemplateRegistry:
    """
    registry.yaml 로드.

    Args:
        registry_path: registry.yaml 경로

    Returns:
        TemplateRegistry (파일이 없으면 빈 레지스트리)
    """
    if not registry_path.exists():
        return TemplateRegistry()

    with open(registry_path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise TemplateError(
                ErrorCodes.REGISTRY_INVALID,
                f"Registry file could not be parsed: {e}",
                path=str(registry_path),
            ) from e

    if data is not None and not isinstance(data, dict):
        raise TemplateError(
            ErrorCodes.REGISTRY_INVALID,
            "Registry file must contain a mapping",
            path=str(registry_path),
        )
    return TemplateRegistry.from_dict(data)
