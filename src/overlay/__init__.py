"""
방송 오버레이: 무작위로 고른 댓글을 Socket.IO로 OBS 브라우저 소스에 푸시.

- BroadcastChannel: 접속한 오버레이 전체에 comments 이벤트 전송.
- OverlayScheduler: 갱신/표시 두 주기 태스크.
- OBS에서 브라우저 소스 URL을 http://127.0.0.1:3000/overlay.html 로 설정.
"""

from src.overlay.broadcast import BroadcastChannel, COMMENTS_EVENT
from src.overlay.scheduler import OverlayScheduler
from src.overlay.server import create_app, create_asgi_app

__all__ = [
    "BroadcastChannel",
    "COMMENTS_EVENT",
    "OverlayScheduler",
    "create_app",
    "create_asgi_app",
]
