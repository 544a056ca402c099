"""
core/config.py - 중앙 설정 관리

버전 정보와 CLI 기본값을 한 곳에서 관리합니다.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DEFAULT_OUTPUT_DIR = "./terraform"
FALLBACK_VERSION = "0.1.0"

# 로그 레벨 상한을 적용할 외부 라이브러리 logger
NOISY_LOGGERS = ("oci", "urllib3", "requests")


def get_version() -> str:
    """version.txt에서 버전 문자열 반환 (없으면 FALLBACK_VERSION)"""
    version_file = PROJECT_ROOT / "version.txt"
    try:
        return version_file.read_text(encoding="utf-8").strip() or FALLBACK_VERSION
    except OSError as e:
        logger.debug("Failed to read version file: %s", e)
        return FALLBACK_VERSION
