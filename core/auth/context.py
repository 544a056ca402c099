"""
core/auth/context.py - OCI 설정 로드 및 탐색 컨텍스트

설정 파일 경로 우선순위:
    --config-file > --config (디렉토리) > $OCI_CLI_CONFIG_FILE > ~/.oci/config

프로파일 우선순위:
    --profile > $OCI_CLI_PROFILE > DEFAULT

Example:
    path = resolve_config_path(config_file=None, config_dir=None)
    ctx = load_context(resolve_profile(None), path, region_override="us-ashburn-1")
    print(ctx.tenancy_id, ctx.region)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any

import oci

from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join("~", ".oci", "config")
DEFAULT_PROFILE = "DEFAULT"

CONFIG_FILE_ENV = "OCI_CLI_CONFIG_FILE"
PROFILE_ENV = "OCI_CLI_PROFILE"


@dataclass
class DiscoveryContext:
    """단일 실행의 인증/범위 정보

    Attributes:
        tenancy_id: Tenancy OCID (탐색 범위)
        user_id: User OCID
        region: 실행 리전 (--region 지정 시 덮어씀)
        profile: 사용한 프로파일 이름
        config_path: 설정 파일 전체 경로
        config_dir: 설정 파일이 있는 디렉토리
        always_free: Always-Free 필터 적용 여부
        config: oci.config.from_file() 결과 (SDK client 생성용)
    """

    tenancy_id: str
    user_id: str
    region: str
    profile: str
    config_path: str
    config_dir: str
    always_free: bool = False
    config: dict[str, Any] = field(default_factory=dict, repr=False)


def resolve_config_path(config_file: str | None = None, config_dir: str | None = None) -> str:
    """설정 파일 경로 결정

    Args:
        config_file: --config-file 값
        config_dir: --config 값 (디렉토리, 파일명은 config)

    Returns:
        ~가 확장된 설정 파일 경로
    """
    if config_file:
        path = config_file
    elif config_dir:
        path = os.path.join(config_dir, "config")
    else:
        path = os.environ.get(CONFIG_FILE_ENV) or DEFAULT_CONFIG_PATH
    return os.path.expanduser(path)


def resolve_profile(profile: str | None = None) -> str:
    """프로파일 이름 결정"""
    return profile or os.environ.get(PROFILE_ENV) or DEFAULT_PROFILE


def load_context(
    profile: str,
    config_path: str,
    region_override: str | None = None,
    always_free: bool = False,
) -> DiscoveryContext:
    """OCI 설정 파일에서 탐색 컨텍스트 생성

    Args:
        profile: 프로파일 이름
        config_path: 설정 파일 경로
        region_override: 리전 덮어쓰기 (--region)
        always_free: Always-Free 필터 적용 여부

    Returns:
        DiscoveryContext

    Raises:
        ConfigurationError: 설정 파일/프로파일이 없거나 필수 항목이 누락된 경우
    """
    if not os.path.isfile(config_path):
        raise ConfigurationError("config_file", f"OCI 설정 파일이 없습니다: {config_path}")

    try:
        config = oci.config.from_file(file_location=config_path, profile_name=profile)
    except oci.exceptions.ProfileNotFound as e:
        raise ConfigurationError("profile", f"프로파일을 찾을 수 없습니다: {profile}", e) from e
    except oci.exceptions.InvalidConfig as e:
        raise ConfigurationError("config_file", f"필수 설정 항목이 잘못되었습니다 ({config_path})", e) from e
    except oci.exceptions.ClientError as e:
        raise ConfigurationError("config_file", f"설정 파일을 읽을 수 없습니다: {config_path}", e) from e

    region = region_override or config.get("region") or ""
    if not region:
        raise ConfigurationError("region", f"프로파일 [{profile}]에 region이 없습니다 (--region 사용)")
    if region_override:
        config = {**config, "region": region_override}

    try:
        oci.config.validate_config(config)
    except oci.exceptions.InvalidConfig as e:
        raise ConfigurationError("config_file", f"필수 설정 항목이 잘못되었습니다 ({config_path})", e) from e

    logger.debug(f"설정 로드 완료: profile={profile}, region={region}, path={config_path}")

    return DiscoveryContext(
        tenancy_id=config["tenancy"],
        user_id=config.get("user", ""),
        region=region,
        profile=profile,
        config_path=config_path,
        config_dir=os.path.dirname(config_path),
        always_free=always_free,
        config=config,
    )
