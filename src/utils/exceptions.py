"""
오버레이 서버 예외 계층

- ConfigurationError: 시작 시 필수 설정 누락 (치명적, 프로세스 종료)
- UpstreamTransportError / UpstreamApiError: 댓글 조회 실패 (다음 주기에 재시도)
"""

from typing import Any, Optional


class OverlayError(Exception):
    """오버레이 서버 공통 기본 예외"""
    pass


class ConfigurationError(OverlayError):
    """필수 설정이 없거나 값이 잘못된 경우"""
    pass


class UpstreamError(OverlayError):
    """댓글 소스 호출 실패 공통"""
    pass


class UpstreamTransportError(UpstreamError):
    """네트워크/HTTP 계층 실패 (연결 오류, 타임아웃, 2xx 아닌 응답, JSON 아님)"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamApiError(UpstreamError):
    """정상 응답이지만 payload에 error 봉투가 담긴 경우"""

    def __init__(self, message: str, code: Optional[Any] = None):
        super().__init__(message)
        self.code = code
