"""
디스크립터 파일의 원자적 JSON 쓰기.

같은 폴더에 임시 파일을 쓴 뒤 os.replace로 교체.
대상 폴더는 이미 있어야 하며, 락은 잡지 않음.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def _fsync_dir(dir_path: Path) -> None:
    """rename 결과를 디스크에 반영 (지원하지 않는 OS에서는 경고만)."""
    try:
        fd = os.open(dir_path, os.O_RDONLY | os.O_DIRECTORY)
    except (OSError, AttributeError) as e:
        logger.warning(f"Cannot open {dir_path} for fsync: {e}")
        return
    try:
        os.fsync(fd)
    except OSError as e:
        logger.warning(f"Directory fsync failed for {dir_path}: {e}")
    finally:
        os.close(fd)


def dumps_json(data: dict[str, Any]) -> str:
    """결정론적 JSON 직렬화 (키 순서 = dict 삽입 순서)."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def atomic_write_json(path: Path, data: dict[str, Any]) -> None:
    """
    path에 data를 JSON으로 원자적 기록.

    직렬화나 쓰기가 실패하면 임시 파일을 지우고 예외를 그대로 전파.
    기존 파일은 교체 직전까지 손대지 않음.
    """
    text = dumps_json(data)

    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    temp_path = Path(temp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise

    _fsync_dir(path.parent)
