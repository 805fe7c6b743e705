import asyncio

from src.overlay import COMMENTS_EVENT, BroadcastChannel


def _run_async(coro):
    return asyncio.run(coro)


def test_registers_connect_and_disconnect_handlers(channel, fake_sio):
    assert "connect" in fake_sio.handlers
    assert "disconnect" in fake_sio.handlers

    _run_async(fake_sio.handlers["connect"]("sid-1", {}))
    assert channel.subscriber_count == 1
    _run_async(fake_sio.handlers["disconnect"]("sid-1", "client disconnect"))
    assert channel.subscriber_count == 0


def test_push_reaches_every_subscriber(channel, fake_sio, make_comment):
    for sid in ("a", "b", "c"):
        channel.subscribe(sid)

    delivered = _run_async(channel.push([make_comment(1), make_comment(2)]))

    assert delivered == 3
    assert sorted(to for _, _, to in fake_sio.sent) == ["a", "b", "c"]
    for event, data, _ in fake_sio.sent:
        assert event == COMMENTS_EVENT
        assert [d["id"] for d in data] == ["c1", "c2"]
        assert set(data[0]) == {"authorName", "message", "createdAt", "id"}


def test_push_empty_list_is_sent_as_clear_signal(channel, fake_sio):
    for sid in ("a", "b", "c"):
        channel.subscribe(sid)

    delivered = _run_async(channel.push([]))

    assert delivered == 3
    assert [data for _, data, _ in fake_sio.sent] == [[], [], []]


def test_one_failing_subscriber_does_not_affect_others(make_fake_sio, make_comment):
    sio = make_fake_sio(failing={"b"})
    channel = BroadcastChannel(sio=sio)
    for sid in ("a", "b", "c"):
        channel.subscribe(sid)

    delivered = _run_async(channel.push([make_comment(1)]))

    assert delivered == 2
    assert sorted(to for _, _, to in sio.sent) == ["a", "c"]
    # 실패한 구독자는 재시도 없이 해제
    assert channel.subscriber_count == 2


def test_new_subscriber_only_sees_future_pushes(channel, fake_sio, make_comment):
    channel.subscribe("early")
    _run_async(channel.push([make_comment(1)]))
    channel.subscribe("late")
    _run_async(channel.push([make_comment(2)]))

    late = [data for _, data, to in fake_sio.sent if to == "late"]
    assert late == [[make_comment(2).to_payload()]]


def test_push_without_subscribers(channel, fake_sio, make_comment):
    assert _run_async(channel.push([make_comment(1)])) == 0
    assert fake_sio.sent == []


def test_default_server_is_socketio():
    import socketio

    channel = BroadcastChannel()
    assert isinstance(channel.sio, socketio.AsyncServer)
