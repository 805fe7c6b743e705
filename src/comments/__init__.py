"""
댓글 수집 모듈
업스트림 댓글 조회 → 정규화 → 최신 배치 보관/샘플링
"""

from .models import NormalizedComment, UNKNOWN_AUTHOR
from .comment_parser import CommentParser, parse_timestamp
from .store import CommentStore
from .base_source import CommentSource
from .facebook_client import FacebookCommentSource

__all__ = [
    "NormalizedComment",
    "UNKNOWN_AUTHOR",
    "CommentParser",
    "parse_timestamp",
    "CommentStore",
    "CommentSource",
    "FacebookCommentSource",
]
