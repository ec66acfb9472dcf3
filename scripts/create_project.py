#!/usr/bin/env python3
"""
create_project.py - 명령줄에서 프로젝트 생성 / 템플릿 목록 조회

registry.yaml에 등록되고 디스크에 현재 버전이 있는 템플릿만 사용 가능.

사용법:
    # 사용 가능한 템플릿 목록
    uv run python scripts/create_project.py --list

    # 빈 프로젝트 생성 (~/Projects/My Study)
    uv run python scripts/create_project.py --directory ~/Projects --name "My Study"

    # 템플릿으로 생성
    uv run python scripts/create_project.py --directory ~/Projects --name "My Study" \\
        --template PROJECT-BASIC --template-version 1

    # 기존 폴더를 프로젝트로 등록
    uv run python scripts/create_project.py --directory ~/Projects/Existing --existing
"""

import argparse
import logging
from pathlib import Path

from src.domain.constants import TEMPLATE_REGISTRY_FILENAME, ProjectType
from src.domain.errors import ProjectError
from src.projects.service import create_project
from src.templates.catalog import list_templates
from src.templates.registry import load_registry

# 로깅 설정
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="프로젝트 생성 / 템플릿 목록 조회",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="사용 가능한 템플릿 목록 출력",
    )
    parser.add_argument(
        "--directory",
        type=str,
        help="새 프로젝트의 상위 폴더 (--existing이면 프로젝트 폴더 자체)",
    )
    parser.add_argument(
        "--name",
        type=str,
        help="프로젝트 표시 이름 (폴더명은 정리된 이름 사용)",
    )
    parser.add_argument(
        "--existing",
        action="store_true",
        help="기존 폴더를 프로젝트로 등록",
    )
    parser.add_argument(
        "--template",
        type=str,
        help="템플릿 ID (예: PROJECT-BASIC)",
    )
    parser.add_argument(
        "--template-version",
        type=str,
        help="템플릿 버전 (기본: 레지스트리의 현재 버전)",
    )
    parser.add_argument(
        "--templates-root",
        type=str,
        default=str(Path(__file__).parent.parent / "templates"),
        help="템플릿 루트 폴더 (기본: templates)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    templates_root = Path(args.templates_root).expanduser()
    registry = load_registry(templates_root / TEMPLATE_REGISTRY_FILENAME)
    templates = list_templates(templates_root, registry)

    if args.list:
        if not templates:
            logger.info("사용 가능한 템플릿 없음")
        for entry in templates:
            logger.info(f"  {entry.id} v{entry.version} - {entry.name}: {entry.description}")
        return 0

    if not args.directory:
        logger.error("--directory 필요 (또는 --list)")
        return 2

    template = None
    if args.template:
        version = args.template_version
        if version is None:
            registered = registry.get(args.template)
            if registered is None:
                logger.error(f"등록되지 않은 템플릿: {args.template}")
                return 1
            version = registered.version
        template = {"id": args.template, "version": version}

    request = {
        "directory": args.directory,
        "name": args.name,
        "type": (ProjectType.EXISTING if args.existing else ProjectType.NEW).value,
    }

    try:
        descriptor = create_project(request, template=template, templates=templates)
    except ProjectError as e:
        logger.error(f"프로젝트 생성 실패: {e}")
        return 1

    logger.info(f"프로젝트: {descriptor.name} ({descriptor.id})")
    logger.info(f"  경로: {descriptor.path}")
    if descriptor.template:
        logger.info(f"  템플릿: {descriptor.template.id} v{descriptor.template.version}")
    return 0


if __name__ == "__main__":
    exit(main())
