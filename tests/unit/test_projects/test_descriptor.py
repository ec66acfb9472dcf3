"""
test_descriptor.py - 프로젝트 디스크립터 테스트

검증:
- `~` 확장 후 .project-descriptor.json 읽기/쓰기
- 디렉터리 없음 → None, 손상된 JSON → DESCRIPTOR_CORRUPT
- 폴더명 정리 (마침표, 금지 문자, 255자)
- 생성 요청 검증 (new / existing)
- 초기화 멱등성 (기존 id 유지, 템플릿 정보 필터링)
"""

import json
import os
from pathlib import Path

import pytest

from src.domain.constants import (
    PROJECT_DESCRIPTOR_FILENAME,
    PROJECT_FORMAT_VERSION,
    ProjectType,
)
from src.domain.errors import ErrorCodes, ProjectError
from src.domain.schemas import ProjectDescriptor, TemplateRef
from src.projects import descriptor as descriptor_module
from src.projects.descriptor import (
    initialize_project,
    load_descriptor,
    sanitize_folder_name,
    save_descriptor,
    validate_and_build_descriptor,
)

PROJECT_JSON = """{
  "formatVersion": "1",
  "id": "d01d2925-f6ff-4f8e-988f-fca2ee193427",
  "name": "Test 1",
  "tags": [ "tag1", "tag2", "tag3" ]
}"""

INVALID_PROJECT_JSON = """{
  "id": "d01d2925-f6ff-4f8e-988f-fca2ee193427
}"""


def write_descriptor(project_dir: Path, content: str) -> Path:
    path = project_dir / PROJECT_DESCRIPTOR_FILENAME
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture
def descriptor(project_dir: Path) -> ProjectDescriptor:
    """초기화 전 디스크립터."""
    return ProjectDescriptor(
        id="1",
        name="Test",
        path=str(project_dir),
        format_version=PROJECT_FORMAT_VERSION,
    )


# =============================================================================
# load_descriptor 테스트
# =============================================================================


class TestLoadDescriptor:
    """load_descriptor 함수 테스트."""

    def test_resolves_home_path(self, home_dir: Path):
        """`~/Test/Path` → <home>/Test/Path/.project-descriptor.json."""
        project = home_dir / "Test" / "Path"
        project.mkdir(parents=True)
        write_descriptor(project, PROJECT_JSON)

        loaded = load_descriptor("~/Test/Path")

        assert loaded is not None
        assert loaded.id == "d01d2925-f6ff-4f8e-988f-fca2ee193427"

    def test_returns_project_details(self, project_dir: Path):
        """디스크립터 필드 + 알 수 없는 키 보존."""
        write_descriptor(project_dir, PROJECT_JSON)

        loaded = load_descriptor(project_dir)

        assert loaded.name == "Test 1"
        assert loaded.format_version == "1"
        assert loaded.extra == {"tags": ["tag1", "tag2", "tag3"]}

    def test_invalid_json_raises(self, project_dir: Path):
        """손상된 JSON → DESCRIPTOR_CORRUPT (None으로 취급하지 않음)."""
        write_descriptor(project_dir, INVALID_PROJECT_JSON)

        with pytest.raises(ProjectError) as exc_info:
            load_descriptor(project_dir)

        assert exc_info.value.code == ErrorCodes.DESCRIPTOR_CORRUPT
        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    def test_non_object_json_raises(self, project_dir: Path):
        """JSON 배열 → DESCRIPTOR_CORRUPT."""
        write_descriptor(project_dir, "[1, 2, 3]")

        with pytest.raises(ProjectError) as exc_info:
            load_descriptor(project_dir)

        assert exc_info.value.code == ErrorCodes.DESCRIPTOR_CORRUPT

    def test_missing_directory_returns_none(self, tmp_path: Path):
        """없는 폴더 → None."""
        assert load_descriptor(tmp_path / "Missing" / "Path") is None

    def test_missing_descriptor_file_returns_none(self, project_dir: Path):
        """폴더는 있지만 디스크립터 없음 → None."""
        assert load_descriptor(project_dir) is None

    def test_format_version_mismatch_is_surfaced(self, project_dir: Path, caplog):
        """formatVersion 불일치 → 그대로 반환 + 경고."""
        write_descriptor(project_dir, json.dumps({"formatVersion": "0", "id": "1"}))

        loaded = load_descriptor(project_dir)

        assert loaded.format_version == "0"
        assert loaded.is_current_format is False
        assert "formatVersion" in caplog.text


# =============================================================================
# save_descriptor 테스트
# =============================================================================


class TestSaveDescriptor:
    """save_descriptor 함수 테스트."""

    def test_resolves_home_path(self, home_dir: Path):
        """`~` 경로에 저장."""
        project = home_dir / "Test" / "Path"
        project.mkdir(parents=True)

        save_descriptor("~/Test/Path", ProjectDescriptor(id="1"))

        saved = json.loads((project / PROJECT_DESCRIPTOR_FILENAME).read_text(encoding="utf-8"))
        assert saved["id"] == "1"

    def test_overwrites_existing_file(self, project_dir: Path):
        """기존 디스크립터 덮어쓰기."""
        write_descriptor(project_dir, PROJECT_JSON)

        save_descriptor(project_dir, ProjectDescriptor(id="2", name="Renamed"))

        loaded = load_descriptor(project_dir)
        assert loaded.id == "2"
        assert loaded.name == "Renamed"

    def test_invalid_project_path_raises(self, tmp_path: Path):
        """없는 폴더 → PROJECT_DIR_NOT_FOUND, 폴더 생성하지 않음."""
        target = tmp_path / "Invalid" / "Test" / "Path"

        with pytest.raises(ProjectError) as exc_info:
            save_descriptor(target, ProjectDescriptor(id="1"))

        assert exc_info.value.code == ErrorCodes.PROJECT_DIR_NOT_FOUND
        assert not target.exists()

    @pytest.mark.parametrize("value", [None, ProjectDescriptor()])
    def test_descriptor_without_id_raises(self, project_dir: Path, value):
        """None 또는 id 없음 → INVALID_DESCRIPTOR."""
        with pytest.raises(ProjectError) as exc_info:
            save_descriptor(project_dir, value)

        assert exc_info.value.code == ErrorCodes.INVALID_DESCRIPTOR
        assert not (project_dir / PROJECT_DESCRIPTOR_FILENAME).exists()

    def test_stale_format_version_raises(self, project_dir: Path):
        """현재 버전이 아닌 formatVersion은 저장 불가."""
        with pytest.raises(ProjectError) as exc_info:
            save_descriptor(project_dir, ProjectDescriptor(id="1", format_version="0"))

        assert exc_info.value.code == ErrorCodes.INVALID_DESCRIPTOR

    def test_round_trip(self, project_dir: Path):
        """save → load 결과가 원본과 동일."""
        original = ProjectDescriptor(
            id="d01d2925-f6ff-4f8e-988f-fca2ee193427",
            name="Round Trip",
            path=str(project_dir),
            last_accessed="2026-10-17T09:00:00+00:00",
            favorite=True,
            template=TemplateRef(id="TEST-BASIC", version="1"),
            extra={"tags": ["a", "b"], "notes": [{"id": "n1", "content": "메모"}]},
        )

        save_descriptor(project_dir, original)

        assert load_descriptor(project_dir) == original

    def test_deterministic_serialization(self, project_dir: Path):
        """같은 디스크립터 → 같은 바이트."""
        descriptor = ProjectDescriptor(id="1", name="Same")
        file_path = project_dir / PROJECT_DESCRIPTOR_FILENAME

        save_descriptor(project_dir, descriptor)
        first = file_path.read_bytes()
        save_descriptor(project_dir, descriptor)

        assert file_path.read_bytes() == first


# =============================================================================
# sanitize_folder_name 테스트
# =============================================================================


class TestSanitizeFolderName:
    """sanitize_folder_name 함수 테스트."""

    @pytest.mark.parametrize("value", [None, ""])
    def test_empty_input(self, value):
        """None, 빈 문자열 → ''."""
        assert sanitize_folder_name(value) == ""

    @pytest.mark.parametrize("value", [".test", " .test", "...test", ". .test"])
    def test_strips_leading_periods(self, value):
        """앞쪽 마침표 제거."""
        assert sanitize_folder_name(value) == "test"

    @pytest.mark.parametrize("value", ["test.", "test. ", "test...", "test. ."])
    def test_strips_trailing_periods(self, value):
        """뒤쪽 마침표 제거."""
        assert sanitize_folder_name(value) == "test"

    @pytest.mark.parametrize("value", ["Simple example", "This is okay!", "1+1=2", "v1.2 final"])
    def test_leaves_valid_characters(self, value):
        """유효한 이름은 그대로."""
        assert sanitize_folder_name(value) == value

    def test_removes_illegal_characters(self):
        """금지 문자 제거 후 다시 앞뒤 정리."""
        assert sanitize_folder_name('.My: Test** Project ??') == "My Test Project"
        assert sanitize_folder_name('a\\b/c:d*e?f"g<h>i|j') == "abcdefghij"

    def test_truncates_to_255(self):
        """256자 → 앞 255자."""
        long_name = "a" * 255

        assert sanitize_folder_name(long_name) == long_name
        assert sanitize_folder_name(long_name + "a") == long_name

    def test_truncation_keeps_combining_sequence(self):
        """결합 문자 앞에서 자르지 않음."""
        name = "a" * 254 + "e\u0301" + "b"

        sanitized = sanitize_folder_name(name)

        assert sanitized == "a" * 254
        assert len(sanitized) <= 255

    @pytest.mark.parametrize(
        "value",
        [".test", "test. ", '.My: Test** Project ??', "a" * 300, " . x . ", "é" * 200],
    )
    def test_idempotent(self, value):
        """두 번 적용해도 결과 동일."""
        once = sanitize_folder_name(value)
        assert sanitize_folder_name(once) == once


# =============================================================================
# validate_and_build_descriptor 테스트
# =============================================================================


class TestValidateAndBuildDescriptor:
    """validate_and_build_descriptor 함수 테스트."""

    def test_none_is_invalid(self):
        """None → invalid."""
        report = validate_and_build_descriptor(None)

        assert report.is_valid is False
        assert report.details == "No project information was provided for validation"
        assert report.descriptor is None

    def test_unknown_type_is_invalid(self):
        """알 수 없는 타입 → invalid, 타입 값 포함."""
        report = validate_and_build_descriptor(
            {"directory": "/Test/Path", "name": "My Test Project", "type": "Invalid"}
        )

        assert report.is_valid is False
        assert report.details == "An unknown project type (Invalid) was specified."

    def test_new_project(self):
        """new → id/lastAccessed 발급, path = directory/name."""
        report = validate_and_build_descriptor(
            {"directory": "/Test/Path", "name": "My Test Project", "type": ProjectType.NEW}
        )

        assert report.is_valid is True
        assert report.details == ""
        descriptor = report.descriptor
        assert descriptor.format_version == PROJECT_FORMAT_VERSION
        assert len(descriptor.id) == 36  # UUID v4, 하이픈 포함
        assert descriptor.path == "/Test/Path/My Test Project"
        assert descriptor.last_accessed
        assert descriptor.favorite is False
        assert descriptor.name == "My Test Project"

    def test_new_project_short_path(self):
        """{directory: /p, name: N} → /p/N."""
        report = validate_and_build_descriptor({"directory": "/p", "name": "N", "type": "new"})

        assert report.is_valid is True
        assert report.descriptor.path == "/p/N"

    def test_new_project_resolves_home(self, home_dir: Path):
        """directory = `~` → 홈 디렉터리 기준 경로."""
        report = validate_and_build_descriptor(
            {"directory": "~", "name": "My Test Project", "type": "new"}
        )

        assert report.descriptor.path == str(home_dir / "My Test Project")

    def test_new_project_sanitizes_path_only(self):
        """경로만 정리, 표시 이름은 원본 유지."""
        name = ".My: Test** Project ??"
        report = validate_and_build_descriptor(
            {"directory": "/Test/Path", "name": name, "type": "new"}
        )

        assert report.descriptor.name == name
        assert report.descriptor.path == "/Test/Path/My Test Project"

    def test_new_project_without_usable_name_is_invalid(self):
        """정리 후 빈 이름 → invalid."""
        report = validate_and_build_descriptor({"directory": "/Test/Path", "name": "...", "type": "new"})

        assert report.is_valid is False
        assert report.descriptor is None

    def test_missing_directory_is_invalid(self):
        """directory 없음 → invalid."""
        report = validate_and_build_descriptor({"name": "X", "type": "new"})

        assert report.is_valid is False

    def test_existing_project(self):
        """existing → path 그대로, name = 마지막 경로 구성요소."""
        report = validate_and_build_descriptor(
            {"directory": "/Test/Path/My Test Project", "type": ProjectType.EXISTING}
        )

        assert report.is_valid is True
        assert report.details == ""
        descriptor = report.descriptor
        assert descriptor.format_version == PROJECT_FORMAT_VERSION
        assert len(descriptor.id) == 36
        assert descriptor.path == "/Test/Path/My Test Project"
        assert descriptor.last_accessed
        assert descriptor.favorite is False
        assert descriptor.name == "My Test Project"

    def test_relative_directory_becomes_absolute(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """상대 경로 directory → 현재 작업 폴더 기준 절대 경로."""
        monkeypatch.chdir(tmp_path)

        report = validate_and_build_descriptor({"directory": "rel", "name": "N", "type": "new"})

        assert report.descriptor.path == str(tmp_path / "rel" / "N")

    def test_new_ids_are_unique(self):
        """요청마다 새 id."""
        request = {"directory": "/p", "name": "N", "type": "new"}

        first = validate_and_build_descriptor(request).descriptor
        second = validate_and_build_descriptor(request).descriptor

        assert first.id != second.id


# =============================================================================
# initialize_project 테스트
# =============================================================================


class TestInitializeProject:
    """initialize_project 함수 테스트."""

    @pytest.mark.parametrize("value", [None, ProjectDescriptor(path="/x"), ProjectDescriptor(id="1")])
    def test_invalid_descriptor_raises(self, value):
        """None, id 없음, path 없음 → INVALID_DESCRIPTOR."""
        with pytest.raises(ProjectError) as exc_info:
            initialize_project(value)

        assert exc_info.value.code == ErrorCodes.INVALID_DESCRIPTOR

    def test_directory_creation_failure_propagates(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ):
        """폴더 생성 실패 → OSError 전파, 저장 시도 없음."""
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("file", encoding="utf-8")
        saved = []
        monkeypatch.setattr(descriptor_module, "save_descriptor", lambda *a: saved.append(a))

        with pytest.raises(OSError):
            initialize_project(ProjectDescriptor(id="1", name="Test", path=str(blocker / "dir")))

        assert saved == []

    def test_existing_descriptor_is_noop(
        self, project_dir: Path, descriptor: ProjectDescriptor, monkeypatch: pytest.MonkeyPatch
    ):
        """폴더 + id 있는 디스크립터 → 저장하지 않고 기존 디스크립터 반환."""
        descriptor_path = write_descriptor(project_dir, PROJECT_JSON)
        saved = []
        monkeypatch.setattr(descriptor_module, "save_descriptor", lambda *a: saved.append(a))

        result = initialize_project(descriptor)

        assert saved == []
        assert result.id == "d01d2925-f6ff-4f8e-988f-fca2ee193427"
        assert descriptor_path.read_text(encoding="utf-8") == PROJECT_JSON

    def test_existing_directory_without_descriptor(
        self, project_dir: Path, descriptor: ProjectDescriptor
    ):
        """폴더는 있지만 디스크립터 없음 → 저장."""
        result = initialize_project(descriptor)

        assert result.id == "1"
        assert load_descriptor(project_dir) == result

    def test_existing_descriptor_without_id_is_replaced(
        self, project_dir: Path, descriptor: ProjectDescriptor
    ):
        """id 없는 디스크립터 → 새로 저장."""
        write_descriptor(project_dir, '{"name": "no id"}')

        initialize_project(descriptor)

        assert load_descriptor(project_dir).id == "1"

    def test_creates_directory_and_descriptor(self, tmp_path: Path):
        """없는 폴더 → 재귀 생성 후 저장."""
        target = tmp_path / "new" / "nested" / "Project"

        result = initialize_project(ProjectDescriptor(id="1", name="Test", path=str(target)))

        assert target.is_dir()
        assert (target / PROJECT_DESCRIPTOR_FILENAME).is_file()
        assert result.path == str(target)

    def test_resolves_home_path(self, home_dir: Path):
        """`~` 경로 → 확장된 절대 경로로 저장."""
        result = initialize_project(ProjectDescriptor(id="1", name="Test", path="~/Projects/Test"))

        assert (home_dir / "Projects" / "Test" / PROJECT_DESCRIPTOR_FILENAME).is_file()
        assert result.path == str(home_dir / "Projects" / "Test")

    def test_relative_path_saved_absolute(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        """상대 경로 → 절대 경로로 저장, 작업 폴더가 바뀌어도 유효."""
        monkeypatch.chdir(tmp_path)

        result = initialize_project(ProjectDescriptor(id="1", name="N", path="rel/N"))
        monkeypatch.chdir(tmp_path.parent)

        assert os.path.isabs(result.path)
        assert load_descriptor(result.path).path == str(tmp_path / "rel" / "N")

    @pytest.mark.parametrize("template", [None, {}, {"id": 1}, {"version": 1}, {"id": "", "version": "1"}])
    def test_partial_template_is_not_included(self, tmp_path: Path, template):
        """id/version 중 하나라도 없으면 template 없음."""
        target = tmp_path / "Project"

        result = initialize_project(
            ProjectDescriptor(id="1", name="Test", path=str(target)), template
        )

        assert result.template is None
        saved = json.loads((target / PROJECT_DESCRIPTOR_FILENAME).read_text(encoding="utf-8"))
        assert "template" not in saved

    def test_template_is_included(self, tmp_path: Path):
        """id + version → template 저장."""
        target = tmp_path / "Project"

        result = initialize_project(
            ProjectDescriptor(id="1", name="Test", path=str(target)),
            {"id": "test", "version": "1"},
        )

        assert result.template == TemplateRef(id="test", version="1")
        saved = json.loads((target / PROJECT_DESCRIPTOR_FILENAME).read_text(encoding="utf-8"))
        assert saved["template"] == {"id": "test", "version": "1"}

    def test_extra_template_fields_are_dropped(self, tmp_path: Path):
        """id/version 외 필드는 버림."""
        target = tmp_path / "Project"
        template = {"id": "test", "blah": "test", "version": "1", "foo": "bar"}

        result = initialize_project(
            ProjectDescriptor(id="1", name="Test", path=str(target)), template
        )

        assert result.template.to_dict() == {"id": "test", "version": "1"}
