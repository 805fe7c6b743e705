"""
환경 변수 기반 설정.
.env 로딩(load_dotenv)은 실행 스크립트에서, 여기서는 os.environ만 읽음.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .exceptions import ConfigurationError

DEFAULT_VIDEO_ID = "836332258915642"


def _number(env: Mapping[str, str], key: str, default: str, cast=float, minimum: float = 0.0):
    raw = (env.get(key) or default).strip()
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigurationError(f"{key} 값이 숫자가 아닙니다: {raw!r}") from None
    if not math.isfinite(value):
        raise ConfigurationError(f"{key} 값은 유한한 숫자여야 합니다: {raw!r}")
    if value < minimum:
        raise ConfigurationError(f"{key} 값은 {minimum} 이상이어야 합니다: {value}")
    return value


@dataclass(frozen=True)
class Settings:
    """오버레이 서버 설정"""
    access_token: str
    video_id: str = DEFAULT_VIDEO_ID
    host: str = "0.0.0.0"
    port: int = 3000
    graph_api_version: str = "v21.0"
    refresh_interval: float = 30.0
    display_interval: float = 10.0
    startup_delay: float = 10.0
    sample_size: int = 5
    request_timeout: float = 10.0

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        환경 변수에서 설정 생성

        Raises:
            ConfigurationError: PAGE_ACCESS_TOKEN 누락, VIDEO_ID 공백, 숫자 형식 오류
        """
        env = os.environ if env is None else env

        token = (env.get("PAGE_ACCESS_TOKEN") or "").strip()
        if not token:
            raise ConfigurationError("PAGE_ACCESS_TOKEN 환경 변수가 필요합니다")

        video_id = env.get("VIDEO_ID", DEFAULT_VIDEO_ID).strip()
        if not video_id:
            raise ConfigurationError("VIDEO_ID가 비어 있습니다")

        return cls(
            access_token=token,
            video_id=video_id,
            host=(env.get("HOST") or "0.0.0.0").strip(),
            port=_number(env, "PORT", "3000", cast=int, minimum=1),
            graph_api_version=(env.get("GRAPH_API_VERSION") or "v21.0").strip(),
            refresh_interval=_number(env, "REFRESH_INTERVAL_SEC", "30", minimum=0.1),
            display_interval=_number(env, "DISPLAY_INTERVAL_SEC", "10", minimum=0.1),
            startup_delay=_number(env, "STARTUP_DELAY_SEC", "10"),
            sample_size=_number(env, "SAMPLE_SIZE", "5", cast=int, minimum=1),
            request_timeout=_number(env, "REQUEST_TIMEOUT_SEC", "10", minimum=0.1),
        )

    def describe(self) -> dict:
        """시작 로그용 (토큰은 설정 여부만)"""
        return {
            "port": self.port,
            "video_id": self.video_id,
            "token_set": bool(self.access_token),
            "refresh_interval": self.refresh_interval,
            "display_interval": self.display_interval,
            "sample_size": self.sample_size,
        }
