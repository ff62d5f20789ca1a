import pytest
from sqlalchemy import event

from app.core.errors import NotFoundError, ValidationError
from app.db import models
from app.services import booking_service, slot_service


def book(session, instructor, swimmers, capacity=4):
    slot = slot_service.create_slot(session, "2024-03-04", "09:00", "10:00", instructor.id, capacity)
    lesson = None
    for swimmer in swimmers:
        lesson = booking_service.book_lesson(session, swimmer.id, slot.id, "Freestyle")
    return slot, lesson


def test_cancel_unknown_lesson(db_session, make_swimmer):
    with pytest.raises(NotFoundError):
        booking_service.cancel_lesson(db_session, make_swimmer().id, 42)


def test_cancel_by_swimmer_not_enrolled(db_session, make_instructor, make_swimmer):
    slot, lesson = book(db_session, make_instructor(), [make_swimmer("Amy")])
    outsider = make_swimmer("Ben")

    with pytest.raises(ValidationError):
        booking_service.cancel_lesson(db_session, outsider.id, lesson.id)
    db_session.refresh(slot)
    assert slot.current_capacity == 1


def test_last_student_removes_lesson(db_session, make_instructor, make_swimmer):
    amy = make_swimmer("Amy")
    ben = make_swimmer("Ben")
    slot, lesson = book(db_session, make_instructor(), [amy, ben])
    lesson_id = lesson.id

    booking_service.cancel_lesson(db_session, amy.id, lesson_id)
    assert db_session.get(models.Lesson, lesson_id) is not None
    booking_service.cancel_lesson(db_session, ben.id, lesson_id)

    assert db_session.get(models.Lesson, lesson_id) is None
    db_session.refresh(slot)
    assert slot.current_capacity == 0
    assert slot.lesson_ids == []
    assert db_session.query(models.LessonStudent).count() == 0


def test_cancel_twice_is_rejected(db_session, make_instructor, make_swimmer):
    amy = make_swimmer("Amy")
    ben = make_swimmer("Ben")
    slot, lesson = book(db_session, make_instructor(), [amy, ben])
    lesson_id = lesson.id

    booking_service.cancel_lesson(db_session, amy.id, lesson_id)
    with pytest.raises(ValidationError):
        booking_service.cancel_lesson(db_session, amy.id, lesson_id)
    db_session.refresh(slot)
    assert slot.current_capacity == 1


def test_cancel_updates_slot_before_lesson_rows(db_session, make_instructor, make_swimmer):
    amy = make_swimmer("Amy")
    slot, lesson = book(db_session, make_instructor(), [amy], capacity=1)
    lesson_id = lesson.id
    writes = []

    def record(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith(("UPDATE", "DELETE", "INSERT")):
            writes.append(statement.lstrip().upper())

    engine = db_session.get_bind()
    event.listen(engine, "before_cursor_execute", record)
    try:
        booking_service.cancel_lesson(db_session, amy.id, lesson_id)
    finally:
        event.remove(engine, "before_cursor_execute", record)

    assert writes[0].startswith("UPDATE TIME_SLOTS")
    assert any(statement.startswith("DELETE FROM LESSONS") for statement in writes)
    db_session.refresh(slot)
    assert slot.current_capacity == 0
