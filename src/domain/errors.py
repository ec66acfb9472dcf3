"""
Error definitions for the project workspace.

규칙:
- 조용한 실패 금지 → ProjectError로 명시적 실패
- 디렉터리 없음(None 반환)과 디스크립터 손상(에러)은 구분
- 파일시스템 에러(OSError)는 감싸지 않고 그대로 전파
"""

from typing import Any


class ProjectError(Exception):
    """
    프로젝트 관련 검증 에러.

    호출자가 code로 분기할 수 있도록 안정적인 에러 코드를 가짐.

    Usage:
        raise ProjectError(ErrorCodes.INVALID_DESCRIPTOR, "descriptor must have an id")
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


class TemplateError(ProjectError):
    """템플릿 카탈로그/인스턴스화 에러."""


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Descriptor ===
    INVALID_DESCRIPTOR = "INVALID_DESCRIPTOR"
    DESCRIPTOR_CORRUPT = "DESCRIPTOR_CORRUPT"
    PROJECT_DIR_NOT_FOUND = "PROJECT_DIR_NOT_FOUND"
    INVALID_PROJECT = "INVALID_PROJECT"

    # === Assets ===
    ASSETS_REQUIRED = "ASSETS_REQUIRED"
    ASSETS_WITH_NOTES_REQUIRED = "ASSETS_WITH_NOTES_REQUIRED"
    ASSET_NOT_FOUND = "ASSET_NOT_FOUND"

    # === Templates ===
    REGISTRY_INVALID = "REGISTRY_INVALID"
    TARGET_DIR_REQUIRED = "TARGET_DIR_REQUIRED"
    TARGET_DIR_NOT_FOUND = "TARGET_DIR_NOT_FOUND"
    TEMPLATE_REQUIRED = "TEMPLATE_REQUIRED"
    TEMPLATE_VERSION_REQUIRED = "TEMPLATE_VERSION_REQUIRED"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    TEMPLATE_VERSION_NOT_FOUND = "TEMPLATE_VERSION_NOT_FOUND"
