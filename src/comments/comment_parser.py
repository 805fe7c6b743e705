"""
댓글 레코드 파싱 및 정규화
업스트림마다 작성자 위치가 달라서(from / user / author ...) 추출 전략을 순서대로 시도
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional

from .models import NormalizedComment, UNKNOWN_AUTHOR

logger = logging.getLogger(__name__)

AuthorStrategy = Callable[[dict], Optional[str]]


def _nested_name(key: str) -> AuthorStrategy:
    """record[key]["name"] 형태 (Graph API의 from.name 등)"""
    def extract(record: dict) -> Optional[str]:
        value = record.get(key)
        if isinstance(value, dict):
            return _clean(value.get("name"))
        return None
    return extract


def _flat(key: str) -> AuthorStrategy:
    """record[key] 가 바로 문자열인 경우"""
    def extract(record: dict) -> Optional[str]:
        return _clean(record.get(key))
    return extract


def _clean(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


# 첫 번째로 값이 나오는 전략 사용, 전부 실패하면 UNKNOWN_AUTHOR
DEFAULT_AUTHOR_STRATEGIES: tuple[AuthorStrategy, ...] = (
    _nested_name("from"),
    _nested_name("user"),
    _nested_name("author"),
    _flat("author"),
    _flat("from"),
    _flat("user"),
    _flat("username"),
    _flat("name"),
)

_GRAPH_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"  # 2024-05-01T12:34:56+0000


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    작성 시각 파싱. Graph API 형식, ISO-8601, 유닉스 초/밀리초 지원.

    Returns:
        tz-aware datetime 또는 None (파싱 불가)
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        n = float(value)
        try:
            return datetime.fromtimestamp(n / 1000 if n > 1e12 else n, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return datetime.strptime(text, _GRAPH_TIME_FORMAT)
        except ValueError:
            pass
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
        return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)
    return None


class CommentParser:
    """원본 댓글 레코드를 NormalizedComment로 변환하는 클래스"""

    def __init__(
        self,
        author_strategies: Optional[Iterable[AuthorStrategy]] = None,
        placeholder_author: str = UNKNOWN_AUTHOR,
    ):
        """
        Args:
            author_strategies: 작성자 추출 함수 목록 (None이면 기본 순서)
            placeholder_author: 작성자를 찾지 못했을 때 쓸 이름
        """
        self.author_strategies = tuple(author_strategies or DEFAULT_AUTHOR_STRATEGIES)
        self.placeholder_author = placeholder_author

    def extract_author(self, record: dict) -> str:
        for strategy in self.author_strategies:
            name = strategy(record)
            if name:
                return name
        return self.placeholder_author

    def parse(self, record: Any) -> Optional[NormalizedComment]:
        """
        레코드 하나 정규화

        Returns:
            NormalizedComment 또는 None (메시지가 없거나 레코드가 dict가 아닌 경우)
        """
        if not isinstance(record, dict):
            logger.debug(f"dict 아닌 레코드 건너뜀: {type(record).__name__}")
            return None

        message = _clean(record.get("message"))
        if message is None:
            logger.debug(f"메시지 없는 레코드 건너뜀: id={record.get('id')}")
            return None

        created = parse_timestamp(record.get("created_time", record.get("created_at")))
        if created is None:
            created = datetime.now(timezone.utc)

        raw_id = record.get("id")
        comment_id = str(raw_id) if raw_id not in (None, "") else uuid.uuid4().hex

        return NormalizedComment(
            author_name=self.extract_author(record),
            message=message,
            created_at=created.isoformat(),
            id=comment_id,
        )

    def parse_many(self, records: Iterable[Any]) -> list[NormalizedComment]:
        """순서를 유지한 채 정규화, 실패한 레코드는 버림"""
        parsed = [self.parse(r) for r in records]
        comments = [c for c in parsed if c is not None]
        dropped = len(parsed) - len(comments)
        if dropped:
            logger.debug(f"정규화 실패로 {dropped}개 레코드 제외")
        return comments
