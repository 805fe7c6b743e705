"""
페이스북 라이브 댓글 → 주기 조회 → 무작위 5개 → Socket.IO 오버레이 푸시

.env에 PAGE_ACCESS_TOKEN (필수), VIDEO_ID 설정 후 실행.
실행: python examples/facebook_overlay_example.py  (프로젝트 루트에서)

- 갱신: REFRESH_INTERVAL_SEC (기본 30초)마다 댓글 전체 조회, 배치 통째로 교체.
- 표시: DISPLAY_INTERVAL_SEC (기본 10초)마다 배치에서 SAMPLE_SIZE개 무작위 선택 후 푸시.
- 두 주기 모두 STARTUP_DELAY_SEC (기본 10초) 후 시작.
방송 오버레이: OBS 브라우저 소스 URL에 http://127.0.0.1:3000/overlay.html (상태 배지 숨김은 ?obs=1). 포트는 PORT.
"""

import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

from src.main import run
from src.utils import ConfigurationError, Settings, setup_logging

load_dotenv(Path(__file__).resolve().parent.parent / ".env")

logger = logging.getLogger(__name__)


def main():
    log_dir = setup_logging()
    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        logger.error("설정 오류: %s", e)
        print(f"❌ {e}")
        print("   .env에 PAGE_ACCESS_TOKEN을 설정해주세요.")
        sys.exit(1)

    print(f"오버레이: http://127.0.0.1:{settings.port}/overlay.html (로그: {log_dir})")
    print(f"영상 ID: {settings.video_id}, 토큰 설정: {'Yes' if settings.access_token else 'No'}")
    print(f"{settings.startup_delay:g}초 후 댓글 조회 시작... (종료: Ctrl+C)\n")
    run(settings)


if __name__ == "__main__":
    main()
