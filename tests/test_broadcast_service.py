import asyncio
from kanban.routers.realtime import _pump
from kanban.services.broadcast_service import BoardSession, Broadcaster, SessionRegistry, TASK_CREATED, TASK_UPDATED, channel_name


def test_emit_reaches_only_joined_sessions():
    async def scenario():
        broadcaster = Broadcaster()
        joined = BoardSession("u1")
        elsewhere = BoardSession("u2")
        broadcaster.registry.join(joined, "board-1")
        broadcaster.registry.join(elsewhere, "board-2")

        delivered = broadcaster.emit("board-1", TASK_CREATED, {"boardId": "board-1"})
        message = await asyncio.wait_for(joined.queue.get(), 1)
        return delivered, message, elsewhere.queue.qsize()

    delivered, message, other_size = asyncio.run(scenario())
    assert delivered == 1
    assert message == {"event": "task:created", "data": {"boardId": "board-1"}}
    assert other_size == 0


def test_emit_from_worker_thread():
    async def scenario():
        broadcaster = Broadcaster()
        session = BoardSession("u1")
        broadcaster.registry.join(session, "b")
        await asyncio.to_thread(broadcaster.emit, "b", TASK_CREATED, {"boardId": "b"})
        return await asyncio.wait_for(session.queue.get(), 1)

    assert asyncio.run(scenario())["event"] == "task:created"


def test_leave_and_disconnect():
    loop = asyncio.new_event_loop()
    try:
        registry = SessionRegistry()
        session = BoardSession("u1", loop)
        registry.join(session, "a")
        registry.join(session, "b")
        assert session.channels == {channel_name("a"), channel_name("b")}

        registry.leave(session, "a")
        assert registry.subscribers("a") == []
        assert registry.subscribers("b") == [session]

        registry.disconnect(session)
        assert registry.subscribers("b") == []
        assert session.channels == set()
    finally:
        loop.close()


def test_emit_without_subscribers():
    assert Broadcaster().emit("nobody", TASK_CREATED, {}) == 0


def test_delivery_to_closed_session_is_dropped():
    loop = asyncio.new_event_loop()
    session = BoardSession("u1", loop)
    loop.close()

    broadcaster = Broadcaster()
    broadcaster.registry.join(session, "b")
    assert session.deliver({"event": "task:created"}) is False
    assert broadcaster.emit("b", TASK_CREATED, {}) == 0


def test_slow_session_queue_is_bounded():
    async def scenario():
        broadcaster = Broadcaster()
        session = BoardSession("u1", maxsize=10)
        broadcaster.registry.join(session, "b")
        for _ in range(50):
            broadcaster.emit("b", TASK_UPDATED, {"boardId": "b"})
        # laisse passer les callbacks call_soon_threadsafe
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        return session.queue.qsize()

    assert asyncio.run(scenario()) == 10


def test_offer_drops_when_full():
    async def scenario():
        session = BoardSession("u1", maxsize=1)
        return session.offer({"event": "pong"}), session.offer({"event": "pong"}), session.queue.qsize()

    assert asyncio.run(scenario()) == (True, False, 1)


class BrokenSocket:
    async def send_json(self, message):
        raise RuntimeError("connection lost")


def test_send_failure_unregisters_session():
    async def scenario():
        registry = SessionRegistry()
        session = BoardSession("u1")
        registry.join(session, "b")
        session.offer({"event": "pong", "data": {}})
        await asyncio.wait_for(_pump(BrokenSocket(), session, registry), 1)
        return registry.subscribers("b"), session.channels

    subscribers, channels = asyncio.run(scenario())
    assert subscribers == []
    assert channels == set()
