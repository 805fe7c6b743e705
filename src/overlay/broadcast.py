"""
Socket.IO 브로드캐스트 채널.
접속한 오버레이(시청 화면)마다 sid 하나, push 시 현재 등록된 sid 전체에 comments 이벤트 전송.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, Optional

import socketio

from src.comments.models import NormalizedComment

logger = logging.getLogger(__name__)

COMMENTS_EVENT = "comments"


class BroadcastChannel:
    """
    다중 구독 push 채널. 새 구독자는 이후 push만 받음 (이전 기록 재전송 없음).
    push([])는 '화면 비우기' 신호로 그대로 전송.
    """

    def __init__(self, sio: Optional[socketio.AsyncServer] = None):
        self.sio = sio or socketio.AsyncServer(
            async_mode="asgi",
            cors_allowed_origins="*",
            logger=False,
            engineio_logger=False,
        )
        self._subscribers: set[str] = set()
        self.sio.on("connect", self._on_connect)
        self.sio.on("disconnect", self._on_disconnect)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, sid: str) -> None:
        self._subscribers.add(sid)

    def unsubscribe(self, sid: str) -> None:
        self._subscribers.discard(sid)

    async def _on_connect(self, sid, environ, auth=None):
        self.subscribe(sid)
        logger.info(f"오버레이 접속: {sid} (현재 {self.subscriber_count})")

    async def _on_disconnect(self, sid, *args):
        self.unsubscribe(sid)
        logger.info(f"오버레이 접속 종료: {sid} (현재 {self.subscriber_count})")

    async def push(self, comments: Iterable[NormalizedComment]) -> int:
        """
        현재 구독자 전체에 댓글 목록 전송. 구독자별로 독립 전송하며
        한 곳이 실패해도 나머지 전송과 호출자에게 영향 없음.

        Returns:
            전송에 성공한 구독자 수
        """
        payload: list[dict[str, Any]] = [c.to_payload() for c in comments]
        targets = list(self._subscribers)
        if not targets:
            logger.debug("구독자 없음, 전송 생략")
            return 0

        results = await asyncio.gather(
            *[self.sio.emit(COMMENTS_EVENT, payload, to=sid) for sid in targets],
            return_exceptions=True,
        )

        delivered = 0
        for sid, result in zip(targets, results):
            if isinstance(result, BaseException):
                logger.warning(f"오버레이 전송 실패, 구독 해제: {sid} ({result!r})")
                self.unsubscribe(sid)
            else:
                delivered += 1

        logger.info(f"댓글 {len(payload)}개 전송: {delivered}/{len(targets)} 구독자")
        return delivered
