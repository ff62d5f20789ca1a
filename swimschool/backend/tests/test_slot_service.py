import pytest

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.db import models
from app.services import booking_service, slot_service


def test_create_slot_defaults(db_session, make_instructor):
    instructor = make_instructor(styles=["Backstroke"])

    slot = slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 1)

    assert slot.lesson_type == models.LessonType.private
    assert slot.swim_styles == ["Backstroke"]
    assert slot.current_capacity == 0
    assert slot.status == models.SlotStatus.available
    assert slot.lesson_ids == []


def test_create_slot_group_type_from_capacity(db_session, make_instructor):
    instructor = make_instructor()
    slot = slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 8)
    assert slot.lesson_type == models.LessonType.group


def test_private_slot_must_have_single_seat(db_session, make_instructor):
    instructor = make_instructor()
    with pytest.raises(ValidationError):
        slot_service.create_slot(
            db_session, "2024-03-04", "09:00", "10:00", instructor.id, 4, lesson_type="private"
        )


def test_create_slot_rejects_overlap(db_session, make_instructor):
    instructor = make_instructor()
    slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 1)

    with pytest.raises(ConflictError):
        slot_service.create_slot(db_session, "2024-03-04", "09:30", "10:30", instructor.id, 1)

    adjacent = slot_service.create_slot(db_session, "2024-03-04", "10:00", "11:00", instructor.id, 1)
    assert adjacent.start_time == "10:00"


def test_other_instructor_may_share_time(db_session, make_instructor):
    first = make_instructor("Ann")
    second = make_instructor("Bob")
    slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", first.id, 1)
    slot = slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", second.id, 1)
    assert slot.instructor_id == second.id


@pytest.mark.parametrize(
    "args",
    [
        ("2024-03-04", "10:00", "09:00", 1),
        ("2024-03-04", "9:00", "10:00", 1),
        ("03/04/2024", "09:00", "10:00", 1),
        ("2024-03-04", "09:00", "10:00", 0),
    ],
)
def test_create_slot_rejects_invalid_input(db_session, make_instructor, args):
    instructor = make_instructor()
    date, start, end, capacity = args
    with pytest.raises(ValidationError):
        slot_service.create_slot(db_session, date, start, end, instructor.id, capacity)
    assert slot_service.list_slots(db_session) == []


def test_create_slot_unknown_instructor(db_session, make_swimmer):
    swimmer = make_swimmer()
    with pytest.raises(NotFoundError):
        slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", 999, 1)
    with pytest.raises(NotFoundError):
        slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", swimmer.id, 1)


def test_list_slots_filters(db_session, make_instructor):
    first = make_instructor("Ann")
    second = make_instructor("Bob")
    slot_service.create_slot(db_session, "2024-03-04", "11:00", "12:00", first.id, 1)
    slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", first.id, 10)
    slot_service.create_slot(db_session, "2024-03-05", "09:00", "10:00", second.id, 5)

    on_day = slot_service.list_slots(db_session, date="2024-03-04")
    assert [slot.start_time for slot in on_day] == ["09:00", "11:00"]
    assert len(slot_service.list_slots(db_session, instructor_id=second.id)) == 1
    assert {slot.max_capacity for slot in slot_service.list_slots(db_session, min_capacity=5)} == {5, 10}


def test_update_slot_moves_time_and_checks_overlap(db_session, make_instructor):
    instructor = make_instructor()
    slot = slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 1)
    slot_service.create_slot(db_session, "2024-03-04", "11:00", "12:00", instructor.id, 1)

    updated = slot_service.update_slot(db_session, slot.id, {"start_time": "09:30", "end_time": "10:30"})
    assert (updated.start_time, updated.end_time) == ("09:30", "10:30")

    with pytest.raises(ConflictError):
        slot_service.update_slot(db_session, slot.id, {"end_time": "11:30"})


def test_update_slot_capacity_below_bookings(db_session, make_instructor, make_swimmer):
    instructor = make_instructor()
    slot = slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 3)
    booking_service.book_lesson(db_session, make_swimmer("Amy").id, slot.id, "Freestyle")
    booking_service.book_lesson(db_session, make_swimmer("Ben").id, slot.id, "Freestyle")

    with pytest.raises(ValidationError):
        slot_service.update_slot(db_session, slot.id, {"max_capacity": 1})

    updated = slot_service.update_slot(db_session, slot.id, {"max_capacity": 2})
    assert updated.status == models.SlotStatus.booked


def test_update_slot_unknown_field_and_missing(db_session, make_instructor):
    instructor = make_instructor()
    slot = slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 1)
    with pytest.raises(ValidationError):
        slot_service.update_slot(db_session, slot.id, {"current_capacity": 0})
    assert slot_service.update_slot(db_session, 999, {"start_time": "08:00"}) is None


def test_delete_slot(db_session, make_instructor, make_swimmer):
    instructor = make_instructor()
    free = slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 1)
    taken = slot_service.create_slot(db_session, "2024-03-04", "10:00", "11:00", instructor.id, 1)
    booking_service.book_lesson(db_session, make_swimmer().id, taken.id, "Freestyle")

    assert slot_service.delete_slot(db_session, free.id) is True
    assert slot_service.get_slot(db_session, free.id) is None
    assert slot_service.delete_slot(db_session, free.id) is False
    with pytest.raises(ConflictError):
        slot_service.delete_slot(db_session, taken.id)


def test_cancel_slot_releases_lessons(db_session, make_instructor, make_swimmer):
    instructor = make_instructor()
    slot = slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 4)
    lesson = booking_service.book_lesson(db_session, make_swimmer("Amy").id, slot.id, "Freestyle")
    booking_service.book_lesson(db_session, make_swimmer("Ben").id, slot.id, "Freestyle")
    lesson_id = lesson.id

    cancelled = slot_service.cancel_slot(db_session, slot.id)

    assert cancelled.status == models.SlotStatus.cancelled
    assert cancelled.current_capacity == 0
    assert cancelled.lesson_ids == []
    assert db_session.get(models.Lesson, lesson_id) is None
    assert db_session.query(models.LessonStudent).count() == 0

    replacement = slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 1)
    assert replacement.id != slot.id


def test_trailing_newline_time_is_rejected(db_session, make_instructor):
    instructor = make_instructor()
    with pytest.raises(ValidationError):
        slot_service.create_slot(db_session, "2024-03-04", "08:00", "09:00\n", instructor.id, 1)

    slot_service.create_slot(db_session, "2024-03-04", "08:00", "09:00", instructor.id, 1)
    touching = slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 1)
    assert touching.start_time == "09:00"
