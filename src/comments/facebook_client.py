"""
페이스북 Graph API 댓글 클라이언트
라이브 영상 댓글을 주기적으로 조회합니다.

참고: https://developers.facebook.com/docs/graph-api/reference/object/comments
"""

import logging
from typing import Any, Optional

import httpx

from .base_source import CommentSource
from .comment_parser import CommentParser
from .store import CommentStore
from src.utils.exceptions import UpstreamApiError, UpstreamTransportError

logger = logging.getLogger(__name__)

GRAPH_API_BASE_URL = "https://graph.facebook.com"
DEFAULT_API_VERSION = "v21.0"
COMMENT_FIELDS = "id,from,message,created_time"


class FacebookCommentSource(CommentSource):
    """페이스북 Graph API 댓글 소스

    access_token은 쿼리 파라미터로 전달합니다.
    로그에는 토큰을 남기지 않습니다.
    """

    @property
    def platform_name(self) -> str:
        """플랫폼 이름"""
        return "facebook"

    def __init__(
        self,
        video_id: str,
        access_token: str,
        store: CommentStore,
        api_version: str = DEFAULT_API_VERSION,
        timeout: float = 10.0,
        parser: Optional[CommentParser] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            video_id: 라이브 영상(또는 게시물) ID
            access_token: 페이지 Access Token
            store: 댓글 배치 저장소
            api_version: Graph API 버전 (예: v21.0)
            timeout: 요청 타임아웃 (초). 멈춘 요청이 다음 표시 주기를 막지 않도록 유한값
            parser: 정규화 파서
            client: 외부에서 주입할 httpx.AsyncClient (None이면 요청마다 생성)
        """
        super().__init__(video_id, store, parser)
        self.access_token = access_token
        self.api_version = api_version
        self.timeout = timeout
        self._client = client

        self.api_base_url = GRAPH_API_BASE_URL

    @property
    def comments_url(self) -> str:
        return f"{self.api_base_url}/{self.api_version}/{self.resource_id}/comments"

    async def fetch(self) -> list[Any]:
        """
        댓글 목록 조회. 응답: {"data": [...]} 또는 {"error": {...}}
        """
        params = {"fields": COMMENT_FIELDS, "access_token": self.access_token}
        logger.info(f"[{self.platform_name}] 댓글 조회: {self.comments_url}?fields={COMMENT_FIELDS}&access_token=TOKEN_HIDDEN")

        try:
            if self._client is not None:
                response = await self._client.get(self.comments_url, params=params, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.comments_url, params=params)
        except httpx.HTTPError as e:
            # 예외 메시지에 토큰 포함 URL이 들어갈 수 있어 클래스명만 남김
            raise UpstreamTransportError(f"네트워크 오류: {type(e).__name__}") from None

        logger.debug(f"[{self.platform_name}] 응답 상태: {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict) and data.get("error"):
            error = data["error"]
            if isinstance(error, dict):
                raise UpstreamApiError(
                    f"Graph API 오류: {error.get('message') or error}",
                    code=error.get("code"),
                )
            raise UpstreamApiError(f"Graph API 오류: {error}")

        if not response.is_success:
            raise UpstreamTransportError(
                f"HTTP {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        if not isinstance(data, dict):
            raise UpstreamTransportError(
                "JSON 객체가 아닌 응답", status_code=response.status_code
            )

        records = data.get("data")
        if not isinstance(records, list):
            logger.warning(f"[{self.platform_name}] 응답에 data 배열 없음: {str(data)[:200]}")
            return []
        return records
