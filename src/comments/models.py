"""
댓글 모듈 데이터 모델
업스트림 원본 레코드를 정규화한 공통 형태
"""

from dataclasses import dataclass
from typing import Any


UNKNOWN_AUTHOR = "Unknown"


@dataclass(frozen=True)
class NormalizedComment:
    """정규화된 댓글 (message는 항상 비어있지 않음)"""
    author_name: str
    message: str
    created_at: str  # ISO-8601
    id: str

    def to_payload(self) -> dict[str, Any]:
        """오버레이로 보낼 JSON 형태 (camelCase 키)"""
        return {
            "authorName": self.author_name,
            "message": self.message,
            "createdAt": self.created_at,
            "id": self.id,
        }
