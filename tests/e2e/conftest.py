"""
E2E 테스트용 TestClient 설정.

앱 시작 후 app.state의 템플릿 설정을 테스트용 템플릿 루트로 교체.
"""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.app.main import app
from src.domain.constants import DEFAULT_EXCLUDED_FILES
from src.templates.registry import TemplateRegistry


@pytest.fixture
def client(templates_root: Path, registry: TemplateRegistry) -> Generator[TestClient, None, None]:
    """테스트용 템플릿 루트를 보는 FastAPI TestClient."""
    with TestClient(app) as client:
        app.state.templates_root = templates_root
        app.state.registry = registry
        app.state.excluded_files = DEFAULT_EXCLUDED_FILES
        yield client
