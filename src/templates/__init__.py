"""
Templates layer: 템플릿 카탈로그 + 인스턴스화.

역할:
- 레지스트리 로드 (registry.py)
- 디스크 스캔 + 검증 (catalog.py)
- 템플릿 폴더 복사 (instantiator.py)

주의: 폴더 구분
- src/templates/ → 코드 (이 모듈)
- templates/ (루트) → 데이터 저장소 (registry.yaml, <id>/<version>/)
"""

from .catalog import find_template, list_templates, scan_contents
from .instantiator import create_template_contents
from .registry import RegisteredTemplate, TemplateRegistry, load_registry

__all__ = [
    # registry
    "RegisteredTemplate",
    "TemplateRegistry",
    "load_registry",
    # catalog
    "list_templates",
    "scan_contents",
    "find_template",
    # instantiator
    "create_template_contents",
]
