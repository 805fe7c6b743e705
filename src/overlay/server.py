"""
방송 오버레이용 HTTP + Socket.IO 서버.
/ 안내 페이지, /overlay.html 오버레이, /health 상태, /api/state JSON, /socket.io 푸시 채널.
반드시 스케줄러와 같은 이벤트 루프에서 실행 (저장소/채널 공유).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

import socketio
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse

from src.comments.base_source import CommentSource
from src.comments.store import CommentStore
from src.overlay.broadcast import BroadcastChannel

logger = logging.getLogger(__name__)


def _iso(ts: Optional[datetime]) -> Optional[str]:
    return ts.isoformat() if ts else None


def create_app(
    store: CommentStore,
    channel: BroadcastChannel,
    source: Optional[CommentSource] = None,
) -> FastAPI:
    """FastAPI 앱 생성 (Socket.IO 래핑 전)."""
    app = FastAPI(title="Comments Overlay", docs_url=None, redoc_url=None)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "POST"],
    )

    @app.get("/", response_class=HTMLResponse)
    def index_page():
        """서버 안내 페이지. OBS에는 /overlay.html 사용."""
        return HTMLResponse(INDEX_HTML)

    @app.get("/overlay.html", response_class=HTMLResponse)
    def overlay_page():
        """OBS 브라우저 소스에 넣을 URL. Socket.IO로 댓글을 받아 표시."""
        return HTMLResponse(OVERLAY_HTML)

    @app.get("/health")
    def health():
        return JSONResponse({
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        })

    @app.get("/api/state")
    def get_state():
        """현재 배치 크기, 마지막 조회 성공 시각, 구독자 수 반환 (정보용)."""
        return JSONResponse({
            "comment_count": len(store),
            "batch_updated_at": _iso(store.updated_at),
            "last_fetch_at": _iso(source.last_success_at) if source else None,
            "subscribers": channel.subscriber_count,
            "video_id": source.resource_id if source else None,
        })

    return app


def create_asgi_app(app: FastAPI, channel: BroadcastChannel) -> socketio.ASGIApp:
    """/socket.io 요청은 채널로, 나머지는 FastAPI로."""
    return socketio.ASGIApp(channel.sio, other_asgi_app=app)


INDEX_HTML = """<!DOCTYPE html>
<html>
<head><meta charset="UTF-8"><title>Comments Overlay</title></head>
<body>
  <h1>Comments Overlay Server</h1>
  <p>Server is running! Use this URL in OBS:</p>
  <p><a href="/overlay.html">/overlay.html</a></p>
  <p><strong>Comments are shuffled randomly.</strong></p>
</body>
</html>
"""

OVERLAY_HTML = """<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <title>Comments Overlay</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      padding: 20px;
      font-family: Arial, sans-serif;
      background: transparent;
      color: white;
      width: 100vw;
      min-height: 100vh;
    }
    .container { max-width: 800px; margin: 0 auto; }
    .comment {
      background: linear-gradient(135deg, rgba(0,0,0,0.8) 0%, rgba(50,50,50,0.6) 100%);
      padding: 15px;
      margin: 15px 0;
      border-radius: 10px;
      border-left: 5px solid #1877f2;
      backdrop-filter: blur(10px);
      animation: fadeIn 0.5s ease-in;
    }
    @keyframes fadeIn {
      from { opacity: 0; transform: translateY(20px); }
      to { opacity: 1; transform: translateY(0); }
    }
    .user { font-weight: bold; color: #1877f2; font-size: 18px; margin-bottom: 5px; }
    .message { font-size: 16px; line-height: 1.4; margin: 10px 0; }
    .time { font-size: 12px; color: #ccc; text-align: right; }
    .status {
      position: fixed; top: 10px; right: 10px;
      background: rgba(0,0,0,0.7);
      padding: 5px 10px; border-radius: 5px; font-size: 12px;
    }
    .connected { color: #4CAF50; }
    .disconnected { color: #f44336; }
    .error { color: #ff9800; }
    .last-update {
      position: fixed; bottom: 10px; right: 10px;
      font-size: 11px; color: #ccc;
    }
    /* OBS 모드일 때 상태 표시 숨김 (?obs=1) */
    body.obs-mode .status, body.obs-mode .last-update { display: none; }
  </style>
</head>
<body>
  <div class="status" id="status">Connecting...</div>
  <div class="last-update" id="last-update">Loading...</div>
  <div class="container" id="comments">
    <div class="comment">
      <div class="user">System</div>
      <div class="message">Waiting for comments...</div>
    </div>
  </div>

  <script src="https://cdn.socket.io/4.7.5/socket.io.min.js"></script>
  <script>
    if (new URLSearchParams(window.location.search).has('obs')) {
      document.body.classList.add('obs-mode');
    }

    function escapeHtml(text) {
      if (!text) return "";
      return String(text).replace(/&/g, "&amp;")
                         .replace(/</g, "&lt;")
                         .replace(/>/g, "&gt;")
                         .replace(/"/g, "&quot;")
                         .replace(/'/g, "&#039;");
    }

    function card(user, message, time) {
      return '<div class="comment">' +
        '<div class="user">' + escapeHtml(user) + '</div>' +
        '<div class="message">' + escapeHtml(message) + '</div>' +
        '<div class="time">' + escapeHtml(time) + '</div>' +
        '</div>';
    }

    var socket = io();
    var container = document.getElementById('comments');
    var statusEl = document.getElementById('status');
    var lastUpdateEl = document.getElementById('last-update');

    socket.on('connect', function() {
      statusEl.textContent = 'Connected';
      statusEl.className = 'status connected';
      lastUpdateEl.textContent = 'Connected: ' + new Date().toLocaleTimeString();
    });
    socket.on('disconnect', function() {
      statusEl.textContent = 'Disconnected';
      statusEl.className = 'status disconnected';
    });
    socket.on('connect_error', function() {
      statusEl.textContent = 'Server Error';
      statusEl.className = 'status error';
    });

    // 빈 목록은 화면 비우기 신호
    socket.on('comments', function(comments) {
      comments = comments || [];
      lastUpdateEl.textContent = 'Last update: ' + new Date().toLocaleTimeString();
      if (comments.length === 0) {
        container.innerHTML = card('System', 'No comments yet.', new Date().toLocaleTimeString());
        return;
      }
      container.innerHTML = comments.map(function(c) {
        var t = c.createdAt ? new Date(c.createdAt).toLocaleTimeString() : '';
        return card(c.authorName, c.message, t);
      }).join('');
    });
  </script>
</body>
</html>
"""
