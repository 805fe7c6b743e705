"""
공통 테스트 픽스처

- 댓글 팩토리, 저장소
- 가짜 Socket.IO 서버 (emit 기록, 특정 sid 실패 시뮬레이션)
- httpx.MockTransport 기반 Graph API 흉내
"""

import asyncio
import os
import sys

import httpx
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.comments import CommentStore, FacebookCommentSource, NormalizedComment
from src.overlay import BroadcastChannel


def run_async(coro):
    return asyncio.run(coro)


class FakeSocketServer:
    """socketio.AsyncServer 대역: 핸들러 등록과 emit만 흉내"""

    def __init__(self, failing=()):
        self.handlers = {}
        self.sent = []
        self.failing = set(failing)

    def on(self, event, handler=None):
        self.handlers[event] = handler

    async def emit(self, event, data=None, to=None, **kwargs):
        if to in self.failing:
            raise ConnectionError(f"{to} disconnected")
        self.sent.append((event, data, to))


@pytest.fixture
def make_comment():
    def _make(n, author="Viewer"):
        return NormalizedComment(
            author_name=f"{author} {n}",
            message=f"message {n}",
            created_at="2024-05-01T12:00:00+00:00",
            id=f"c{n}",
        )
    return _make


@pytest.fixture
def store():
    return CommentStore()


@pytest.fixture
def fake_sio():
    return FakeSocketServer()


@pytest.fixture
def channel(fake_sio):
    return BroadcastChannel(sio=fake_sio)


@pytest.fixture
def graph_source(store):
    """handler(request) -> httpx.Response 를 받아 FacebookCommentSource 생성"""
    clients = []

    def _make(handler, video_id="12345", token="secret-token"):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return FacebookCommentSource(
            video_id=video_id,
            access_token=token,
            store=store,
            client=client,
        )

    yield _make
    for client in clients:
        run_async(client.aclose())


@pytest.fixture
def make_fake_sio():
    return FakeSocketServer
