import logging
import threading

import httpx
from collabcanvas.client import CanvasRpcClient, CollaborationSession, generate_user_id
from collabcanvas.core.utils import utcnow_naive
from collabcanvas.schemas.canvas import CanvasWithShapes


def test_generate_user_id_shape() -> None:
    user_id = generate_user_id()
    assert user_id.startswith("user_")
    assert len(user_id) == 14
    assert user_id[5:].isalnum() and user_id[5:].lower() == user_id[5:]
    assert generate_user_id() != user_id


def test_mutations_reload_whole_canvas(client) -> None:
    rpc = CanvasRpcClient(http_client=client)
    canvas = rpc.create_canvas("Shared")
    me = CollaborationSession(rpc, user_name="Ann")
    other = CollaborationSession(rpc, user_name="Bob")
    me.open_canvas(canvas.id)
    other.open_canvas(canvas.id)

    shape = me.add_shape("rectangle", x=0, y=0, width=5, height=5, color="#112233")
    assert [s.id for s in me.canvas.shapes] == [shape.id]

    # Bob only sees it after his own reload; there is no push channel.
    assert other.canvas.shapes == []
    other.edit_shape(shape.id, color="#445566")
    assert other.canvas.shapes[0].color == "#445566"

    assert me.remove_shape(shape.id) is True
    assert me.canvas.shapes == []


def test_poll_cursors_filters_own_cursor(client) -> None:
    rpc = CanvasRpcClient(http_client=client)
    canvas = rpc.create_canvas("Cursors")
    me = CollaborationSession(rpc, user_name="Ann")
    other = CollaborationSession(rpc, user_name="Bob")
    me.open_canvas(canvas.id)
    other.open_canvas(canvas.id)

    me.move_cursor(10, 10)
    other.move_cursor(20, 20)

    seen = me.poll_cursors()
    assert [c.user_id for c in seen] == [other.user_id]
    assert seen[0].x == 20.0

    assert other.leave() is True
    assert me.poll_cursors() == []


def test_poll_failures_are_logged_not_raised(caplog) -> None:
    transport = httpx.MockTransport(
        lambda request: httpx.Response(500, json={"error": "Internal server error"})
    )
    rpc = CanvasRpcClient(http_client=httpx.Client(transport=transport, base_url="http://x"))
    now = utcnow_naive()
    session = CollaborationSession(
        rpc,
        user_name="Ann",
        canvas=CanvasWithShapes(id=1, name="x", created_at=now, updated_at=now),
    )

    with caplog.at_level(logging.WARNING):
        assert session.poll_cursors() == []
        assert session.move_cursor(1, 1) is None
        assert session.leave() is False

    assert "Failed to load cursors" in caplog.text
    assert "Failed to update cursor" in caplog.text


def test_poll_without_canvas_is_noop() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    rpc = CanvasRpcClient(http_client=httpx.Client(transport=transport, base_url="http://x"))

    assert CollaborationSession(rpc, user_name="Ann").poll_cursors() == []


def test_run_cursor_loop_stops_on_event() -> None:
    calls: list[int] = []

    class _Session(CollaborationSession):
        def poll_cursors(self):
            calls.append(1)
            if len(calls) >= 3:
                stop.set()
            return []

    stop = threading.Event()
    rpc = CanvasRpcClient(
        http_client=httpx.Client(
            transport=httpx.MockTransport(lambda r: httpx.Response(200)), base_url="http://x"
        )
    )
    _Session(rpc, user_name="Ann").run_cursor_loop(stop, interval=0.001)

    assert len(calls) == 3
