"""
최신 댓글 배치 보관 + 랜덤 샘플링.
배치는 매 갱신마다 통째로 교체 (병합/추가 없음), 프로세스 수명 동안만 유지.
"""

from __future__ import annotations

import logging
import random
from datetime import datetime, timezone
from typing import Iterable, Optional

from .models import NormalizedComment

logger = logging.getLogger(__name__)


class CommentStore:
    """
    쓰기는 갱신 작업 하나만, 읽기는 여러 곳에서.
    배치는 tuple로 따로 만든 뒤 참조 한 번에 교체하므로
    읽는 쪽은 항상 이전 배치 전체 또는 새 배치 전체만 봄.
    """

    def __init__(self, comments: Optional[Iterable[NormalizedComment]] = None):
        self._batch: tuple[NormalizedComment, ...] = tuple(comments or ())
        self.updated_at: Optional[datetime] = None

    def __len__(self) -> int:
        return len(self._batch)

    def snapshot(self) -> tuple[NormalizedComment, ...]:
        """현재 배치 (불변)"""
        return self._batch

    def replace(self, comments: Iterable[NormalizedComment]) -> None:
        """배치 전체 교체"""
        batch = tuple(comments)
        self._batch = batch
        self.updated_at = datetime.now(timezone.utc)
        logger.info(f"댓글 배치 교체: {len(batch)}개")

    def sample(self, k: int) -> list[NormalizedComment]:
        """
        현재 배치에서 min(k, 배치 크기)개를 무작위 순서로 뽑음.
        배치 복사본을 random.shuffle(Fisher-Yates)로 섞고 앞에서 k개만 사용.
        매 호출 독립, 시드 없음.
        """
        if k <= 0:
            return []
        pool = list(self._batch)
        random.shuffle(pool)
        return pool[:k]
