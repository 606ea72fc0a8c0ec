from datetime import timedelta

from collabcanvas.core.utils import utcnow_naive
from collabcanvas.models.canvas import UserCursor
from collabcanvas.services.canvas_service import CanvasService
from collabcanvas.services.cursor_service import CursorService
from sqlmodel import select


def _canvas_id(session, name: str = "Board") -> int:
    return CanvasService(session).create_canvas(name=name).id


def _age(session, cursor_id: int, seconds: int) -> None:
    row = session.get(UserCursor, cursor_id)
    row.updated_at = utcnow_naive() - timedelta(seconds=seconds)
    session.add(row)
    session.commit()


def test_update_cursor_upserts_same_row(session) -> None:
    canvas_id = _canvas_id(session)
    service = CursorService(session)

    first = service.update_cursor(canvas_id=canvas_id, user_id="u1", user_name="Ann", x=1, y=2)
    second = service.update_cursor(
        canvas_id=canvas_id, user_id="u1", user_name="Annie", x=30.5, y=40
    )

    assert second.id == first.id
    assert second.user_name == "Annie"
    assert float(second.x) == 30.5
    assert len(session.exec(select(UserCursor)).all()) == 1


def test_update_cursor_distinct_users_and_canvases(session) -> None:
    a = _canvas_id(session, "A")
    b = _canvas_id(session, "B")
    service = CursorService(session)

    c1 = service.update_cursor(canvas_id=a, user_id="u1", user_name="Ann", x=0, y=0)
    c2 = service.update_cursor(canvas_id=a, user_id="u2", user_name="Bob", x=0, y=0)
    c3 = service.update_cursor(canvas_id=b, user_id="u1", user_name="Ann", x=0, y=0)

    assert len({c1.id, c2.id, c3.id}) == 3
    assert {c.user_id for c in service.get_cursors(a)} == {"u1", "u2"}
    assert [c.user_id for c in service.get_cursors(b)] == ["u1"]


def test_get_cursors_excludes_stale_but_keeps_row(session) -> None:
    canvas_id = _canvas_id(session)
    service = CursorService(session)
    stale = service.update_cursor(canvas_id=canvas_id, user_id="old", user_name="O", x=0, y=0)
    service.update_cursor(canvas_id=canvas_id, user_id="new", user_name="N", x=0, y=0)
    _age(session, stale.id, 31)

    active = service.get_cursors(canvas_id)

    assert [c.user_id for c in active] == ["new"]
    assert session.get(UserCursor, stale.id) is not None


def test_refresh_revives_stale_cursor(session) -> None:
    canvas_id = _canvas_id(session)
    service = CursorService(session)
    cursor = service.update_cursor(canvas_id=canvas_id, user_id="u1", user_name="A", x=0, y=0)
    _age(session, cursor.id, 120)
    assert service.get_cursors(canvas_id) == []

    service.update_cursor(canvas_id=canvas_id, user_id="u1", user_name="A", x=5, y=5)

    assert [c.id for c in service.get_cursors(canvas_id)] == [cursor.id]


def test_custom_ttl_window(session) -> None:
    canvas_id = _canvas_id(session)
    service = CursorService(session, ttl_seconds=120)
    cursor = service.update_cursor(canvas_id=canvas_id, user_id="u1", user_name="A", x=0, y=0)
    _age(session, cursor.id, 60)

    assert len(service.get_cursors(canvas_id)) == 1


def test_remove_cursor(session) -> None:
    canvas_id = _canvas_id(session)
    service = CursorService(session)
    service.update_cursor(canvas_id=canvas_id, user_id="u1", user_name="A", x=0, y=0)

    assert service.remove_cursor(canvas_id, "u1") is True
    assert service.remove_cursor(canvas_id, "u1") is False
    assert service.remove_cursor(canvas_id + 100, "ghost") is False
    assert service.get_cursors(canvas_id) == []


def test_prune_stale_cursors_only_deletes_stale_rows(session) -> None:
    a = _canvas_id(session, "A")
    b = _canvas_id(session, "B")
    service = CursorService(session)
    stale_a = service.update_cursor(canvas_id=a, user_id="u1", user_name="A", x=0, y=0)
    stale_b = service.update_cursor(canvas_id=b, user_id="u1", user_name="A", x=0, y=0)
    service.update_cursor(canvas_id=a, user_id="u2", user_name="B", x=0, y=0)
    _age(session, stale_a.id, 45)
    _age(session, stale_b.id, 45)

    assert service.prune_stale_cursors(canvas_id=a) == 1
    assert session.get(UserCursor, stale_b.id) is not None
    assert service.prune_stale_cursors() == 1
    remaining = session.exec(select(UserCursor)).all()
    assert [c.user_id for c in remaining] == ["u2"]


def test_update_cursor_refreshes_every_duplicate_row(session) -> None:
    canvas_id = _canvas_id(session)
    for _ in range(2):
        session.add(
            UserCursor(canvas_id=canvas_id, user_id="u1", user_name="Old", x=0, y=0)
        )
    session.commit()
    first, second = session.exec(select(UserCursor).order_by(UserCursor.id)).all()
    _age(session, first.id, 90)
    _age(session, second.id, 90)
    service = CursorService(session)

    cursor = service.update_cursor(canvas_id=canvas_id, user_id="u1", user_name="New", x=7, y=8)

    assert cursor.id == first.id
    rows = session.exec(select(UserCursor).order_by(UserCursor.id)).all()
    assert [(r.user_name, float(r.x), float(r.y)) for r in rows] == [("New", 7.0, 8.0)] * 2
    assert len(service.get_cursors(canvas_id)) == 2
