from app.core.constants import UNKNOWN_INSTRUCTOR, UNKNOWN_SWIMMER
from app.db import models
from app.services import booking_service, schedule_service, slot_service


def test_instructor_schedule_is_sorted_with_names(db_session, make_instructor, make_swimmer):
    instructor = make_instructor("Ian")
    late = slot_service.create_slot(db_session, "2024-03-04", "11:00", "12:00", instructor.id, 4)
    slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 1)
    swimmer = make_swimmer("Amy")
    booking_service.book_lesson(db_session, swimmer.id, late.id, "Freestyle")

    schedule = schedule_service.get_instructor_schedule(db_session, instructor.id, "2024-03-04")

    assert schedule.instructor_name == "Ian Test"
    assert [entry.start_time for entry in schedule.entries] == ["09:00", "11:00"]
    assert schedule.entries[0].lesson is None
    booked = schedule.entries[1].lesson
    assert booked.type == "group"
    assert [(student.name, student.swim_style) for student in booked.students] == [
        ("Amy Test", "Freestyle")
    ]


def test_schedule_uses_placeholders_for_missing_users(db_session, make_instructor, make_swimmer):
    instructor = make_instructor()
    swimmer = make_swimmer()
    slot = slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 2)
    booking_service.book_lesson(db_session, swimmer.id, slot.id, "Freestyle")
    instructor_id = instructor.id
    db_session.delete(swimmer)
    db_session.commit()
    db_session.delete(db_session.get(models.User, instructor_id))
    db_session.commit()

    schedule = schedule_service.get_instructor_schedule(db_session, instructor_id, "2024-03-04")

    assert schedule.instructor_name == UNKNOWN_INSTRUCTOR
    assert schedule.entries[0].instructor_name == UNKNOWN_INSTRUCTOR
    assert schedule.entries[0].lesson.students[0].name == UNKNOWN_SWIMMER


def test_available_slots_filtering(db_session, make_instructor, make_swimmer):
    instructor = make_instructor("Ian", styles=["Freestyle", "Butterfly"])
    full = slot_service.create_slot(db_session, "2024-03-04", "08:00", "09:00", instructor.id, 1)
    group = slot_service.create_slot(
        db_session, "2024-03-04", "09:00", "10:00", instructor.id, 5, swim_styles=["Butterfly"]
    )
    private = slot_service.create_slot(db_session, "2024-03-04", "10:00", "11:00", instructor.id, 1)
    cancelled = slot_service.create_slot(db_session, "2024-03-04", "11:00", "12:00", instructor.id, 1)
    booking_service.book_lesson(db_session, make_swimmer().id, full.id, "Freestyle")
    slot_service.cancel_slot(db_session, cancelled.id)

    available = schedule_service.get_available_slots(db_session, "2024-03-04")
    assert [slot.id for slot in available] == [group.id, private.id]
    assert available[0].instructor_name == "Ian Test"
    assert available[0].available_seats == 5

    by_style = schedule_service.get_available_slots(db_session, "2024-03-04", swim_style="Butterfly")
    assert [slot.id for slot in by_style] == [group.id]
    by_type = schedule_service.get_available_slots(db_session, "2024-03-04", lesson_type="private")
    assert [slot.id for slot in by_type] == [private.id]


def test_weekly_schedule_groups_by_day(db_session, make_instructor, make_swimmer):
    instructor = make_instructor()
    monday = slot_service.create_slot(db_session, "2024-03-04", "09:00", "10:00", instructor.id, 5)
    slot_service.create_slot(db_session, "2024-03-06", "09:00", "10:00", instructor.id, 1)
    slot_service.create_slot(db_session, "2024-03-11", "09:00", "10:00", instructor.id, 1)
    booking_service.book_lesson(db_session, make_swimmer("Amy").id, monday.id, "Freestyle")
    booking_service.book_lesson(db_session, make_swimmer("Ben").id, monday.id, "Freestyle")

    week = schedule_service.get_weekly_schedule(db_session, "2024-03-04")

    assert list(week.days) == [
        "2024-03-04",
        "2024-03-05",
        "2024-03-06",
        "2024-03-07",
        "2024-03-08",
        "2024-03-09",
        "2024-03-10",
    ]
    assert len(week.days["2024-03-04"]) == 1
    assert len(week.days["2024-03-06"]) == 1
    assert week.days["2024-03-05"] == []
    assert week.total_lessons == 1
    assert week.total_swimmers == 2


def test_conflicts_report_double_booking_and_style(db_session, make_instructor, make_swimmer):
    instructor = make_instructor(styles=["Freestyle", "Backstroke"])
    first = slot_service.create_slot(db_session, "2024-03-05", "09:00", "10:00", instructor.id, 5)
    second = models.TimeSlot(
        instructor_id=instructor.id,
        date="2024-03-05",
        start_time="09:30",
        end_time="10:30",
        lesson_type=models.LessonType.private,
        swim_styles=["Freestyle"],
        max_capacity=1,
        current_capacity=0,
    )
    db_session.add(second)
    db_session.commit()
    swimmer = make_swimmer(styles=["Backstroke"])
    booking_service.book_lesson(db_session, swimmer.id, first.id, "Backstroke")
    instructor.swimming_styles = ["Freestyle"]
    db_session.commit()

    conflicts = schedule_service.check_conflicts(db_session, "2024-03-04")

    assert [conflict.type for conflict in conflicts] == [
        "instructor_double_booking",
        "style_incompatibility",
    ]
    assert conflicts[0].slot_ids == [first.id, second.id]
    assert conflicts[1].style == "Backstroke"
    assert schedule_service.check_conflicts(db_session, "2024-03-11") == []
