"""
댓글 소스 추상 기본 클래스
모든 플랫폼(페이스북 등)의 댓글 조회 어댑터가 구현해야 하는 인터페이스
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional
import logging

from .comment_parser import CommentParser
from .store import CommentStore
from src.utils.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class CommentSource(ABC):
    """댓글 소스 추상 기본 클래스"""

    def __init__(
        self,
        resource_id: str,
        store: CommentStore,
        parser: Optional[CommentParser] = None,
    ):
        """
        Args:
            resource_id: 댓글을 가져올 대상 ID (라이브 영상/게시물)
            store: 정규화된 배치를 교체할 저장소
            parser: 정규화 파서 (None이면 기본 설정)
        """
        self.resource_id = resource_id
        self.store = store
        self.parser = parser or CommentParser()

        # 마지막으로 조회에 성공한 시각 (정보용)
        self.last_success_at: Optional[datetime] = None

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """플랫폼 이름 반환 (예: 'facebook')"""
        pass

    @abstractmethod
    async def fetch(self) -> list[Any]:
        """
        업스트림 원본 레코드 목록 조회

        Raises:
            UpstreamTransportError: 네트워크/HTTP 실패
            UpstreamApiError: 응답 payload의 error 봉투
        """
        pass

    async def refresh(self) -> bool:
        """
        한 번 조회해서 저장소 배치 교체 - 공통 로직

        Returns:
            True: 조회 성공 (레코드 0개면 저장소는 그대로)
            False: 조회 실패 (저장소 그대로, 다음 주기에 재시도)
        """
        try:
            records = await self.fetch()
        except UpstreamError as e:
            logger.error(f"[{self.platform_name}] 댓글 조회 실패: {e}")
            return False

        self.last_success_at = datetime.now(timezone.utc)

        if not records:
            logger.info(f"[{self.platform_name}] 댓글 없음 (기존 배치 유지)")
            return True

        comments = self.parser.parse_many(records)
        self.store.replace(comments)
        logger.info(
            f"[{self.platform_name}] 댓글 {len(records)}개 수신, "
            f"{len(comments)}개 저장"
        )
        return True
