"""
갱신/표시 주기 스케줄러.
- 갱신 태스크: refresh_interval 마다 CommentSource.refresh()
- 표시 태스크: display_interval 마다 store.sample(k) → channel.push()
두 태스크는 서로 독립이며 시작 지연(startup_delay) 후 동작.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from src.comments.base_source import CommentSource
from src.comments.store import CommentStore
from src.overlay.broadcast import BroadcastChannel

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 5


class OverlayScheduler:
    """두 개의 주기 태스크를 소유. stop()으로 취소 가능."""

    def __init__(
        self,
        source: CommentSource,
        store: CommentStore,
        channel: BroadcastChannel,
        refresh_interval: float = 30.0,
        display_interval: float = 10.0,
        startup_delay: float = 10.0,
        sample_size: int = DEFAULT_SAMPLE_SIZE,
    ):
        self.source = source
        self.store = store
        self.channel = channel
        self.refresh_interval = refresh_interval
        self.display_interval = display_interval
        self.startup_delay = startup_delay
        self.sample_size = sample_size

        self._refresh_task: Optional[asyncio.Task] = None
        self._display_task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return any(t is not None and not t.done() for t in (self._refresh_task, self._display_task))

    async def refresh_once(self) -> bool:
        return await self.source.refresh()

    async def display_once(self) -> int:
        picked = self.store.sample(self.sample_size)
        return await self.channel.push(picked)

    async def _refresh_worker(self) -> None:
        await asyncio.sleep(self.startup_delay)
        while True:
            try:
                await self.refresh_once()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception("refresh_worker 오류: %s", e)
            await asyncio.sleep(self.refresh_interval)

    async def _display_worker(self) -> None:
        await asyncio.sleep(self.startup_delay)
        while True:
            try:
                await self.display_once()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.exception("display_worker 오류: %s", e)
            await asyncio.sleep(self.display_interval)

    def start(self) -> None:
        """실행 중인 이벤트 루프에 두 태스크 생성"""
        if self.is_running:
            return
        self._refresh_task = asyncio.create_task(self._refresh_worker(), name="comment-refresh")
        self._display_task = asyncio.create_task(self._display_worker(), name="comment-display")
        logger.info(
            f"스케줄러 시작: {self.startup_delay}초 후 갱신 {self.refresh_interval}초 / "
            f"표시 {self.display_interval}초 주기 (k={self.sample_size})"
        )

    async def stop(self) -> None:
        """두 태스크 취소 후 종료 대기"""
        tasks = [t for t in (self._refresh_task, self._display_task) if t is not None]
        for t in tasks:
            t.cancel()
        for t in tasks:
            try:
                await t
            except asyncio.CancelledError:
                pass
        self._refresh_task = None
        self._display_task = None
        logger.info("스케줄러 중지")
