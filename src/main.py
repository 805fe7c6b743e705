"""
페이스북 라이브 댓글 오버레이 서버 조립/실행.
uvicorn 서버와 스케줄러를 같은 이벤트 루프에서 돌림.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import uvicorn

from src.comments import CommentSource, CommentStore, FacebookCommentSource
from src.overlay import BroadcastChannel, OverlayScheduler, create_app, create_asgi_app
from src.utils.settings import Settings

logger = logging.getLogger(__name__)


@dataclass
class OverlayComponents:
    store: CommentStore
    source: CommentSource
    channel: BroadcastChannel
    scheduler: OverlayScheduler
    asgi_app: object


def build(settings: Settings) -> OverlayComponents:
    """설정으로 저장소 → 소스 → 채널 → 스케줄러 → ASGI 앱 구성"""
    store = CommentStore()
    source: CommentSource = FacebookCommentSource(
        video_id=settings.video_id,
        access_token=settings.access_token,
        store=store,
        api_version=settings.graph_api_version,
        timeout=settings.request_timeout,
    )
    channel = BroadcastChannel()
    scheduler = OverlayScheduler(
        source=source,
        store=store,
        channel=channel,
        refresh_interval=settings.refresh_interval,
        display_interval=settings.display_interval,
        startup_delay=settings.startup_delay,
        sample_size=settings.sample_size,
    )
    app = create_app(store, channel, source)
    return OverlayComponents(store, source, channel, scheduler, create_asgi_app(app, channel))


async def serve(settings: Settings) -> None:
    components = build(settings)
    config = uvicorn.Config(
        components.asgi_app,
        host=settings.host,
        port=settings.port,
        log_level="warning",
    )
    server = uvicorn.Server(config)

    logger.info("서버 시작: %s", settings.describe())
    components.scheduler.start()
    try:
        await server.serve()
    finally:
        await components.scheduler.stop()


def run(settings: Settings) -> None:
    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        pass
