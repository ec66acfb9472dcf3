"""
Pytest fixtures for the project workspace tests.

실제 파일시스템(tmp_path) 기반:
- 홈 디렉터리는 HOME 환경변수로 tmp_path 하위에 고정
- 템플릿 루트는 합성 레지스트리와 함께 생성
"""

from pathlib import Path

import pytest

from src.templates.registry import TemplateRegistry

# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def home_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """`~`가 가리킬 테스트용 홈 디렉터리."""
    home = tmp_path / "home" / "tester"
    home.mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """빈 프로젝트 폴더."""
    path = tmp_path / "projects" / "Demo"
    path.mkdir(parents=True)
    return path


# =============================================================================
# Template Fixtures
# =============================================================================


@pytest.fixture
def registry() -> TemplateRegistry:
    """합성 레지스트리 (EMPTY, BASIC, NUBCC 모두 현재 버전 1)."""
    return TemplateRegistry.from_dict(
        {
            "templates": [
                {"id": "TEST-EMPTY", "name": "Empty", "version": "1"},
                {"id": "TEST-BASIC", "name": "Basic", "version": "1"},
                {"id": "TEST-NUBCC", "name": "NUBCC", "version": "1"},
            ]
        }
    )


@pytest.fixture
def templates_root(tmp_path: Path) -> Path:
    """
    테스트용 템플릿 루트.

    포함:
    - TEST-EMPTY/1/ (빈 폴더)
    - TEST-BASIC/1/ (README, code/, data/raw/, data/processed/, .DS_Store)
    - TEST-NUBCC/1/ (protocol.md)
    - unregistered/1/ (레지스트리에 없음)
    """
    root = tmp_path / "templates"

    (root / "TEST-EMPTY" / "1").mkdir(parents=True)

    basic = root / "TEST-BASIC" / "1"
    (basic / "code").mkdir(parents=True)
    (basic / "data" / "raw").mkdir(parents=True)
    (basic / "data" / "processed").mkdir(parents=True)
    (basic / "README").write_text("# Basic\n", encoding="utf-8")
    (basic / ".DS_Store").write_bytes(b"\x00\x00\x00\x01Bud1")
    (basic / "data" / ".DS_Store").write_bytes(b"\x00\x00\x00\x01Bud1")

    nubcc = root / "TEST-NUBCC" / "1"
    nubcc.mkdir(parents=True)
    (nubcc / "protocol.md").write_text("protocol", encoding="utf-8")

    (root / "unregistered" / "1").mkdir(parents=True)
    return root
