from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    user_role = postgresql.ENUM("swimmer", "instructor", "admin", name="userrole")
    user_role.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("first_name", sa.String(length=30), nullable=False),
        sa.Column("last_name", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), unique=True),
        sa.Column("phone", sa.String(length=15)),
        sa.Column("role", user_role, nullable=False),
        sa.Column("swimming_styles", sa.JSON()),
        sa.Column("preferred_lesson_type", sa.String(length=16)),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "instructor_availability",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "instructor_id",
            sa.Integer(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            index=True,
        ),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.UniqueConstraint(
            "instructor_id", "date", "start_time", name="uq_availability_instructor_start"
        ),
    )

    lesson_type = postgresql.ENUM("private", "group", name="lessontype")
    lesson_type.create(op.get_bind(), checkfirst=True)
    slot_status = postgresql.ENUM("available", "booked", "cancelled", name="slotstatus")
    slot_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "time_slots",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("instructor_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("start_time", sa.String(length=5), nullable=False),
        sa.Column("end_time", sa.String(length=5), nullable=False),
        sa.Column("lesson_type", lesson_type, nullable=False),
        sa.Column("swim_styles", sa.JSON()),
        sa.Column("max_capacity", sa.Integer(), nullable=False),
        sa.Column("current_capacity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("status", slot_status, server_default="available"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("max_capacity >= 1", name="ck_time_slot_max_capacity_positive"),
        sa.CheckConstraint(
            "current_capacity >= 0 AND current_capacity <= max_capacity",
            name="ck_time_slot_capacity_bounds",
        ),
    )
    op.create_index("ix_time_slot_instructor_date", "time_slots", ["instructor_id", "date"])

    lesson_status = postgresql.ENUM("scheduled", "completed", "canceled", name="lessonstatus")
    lesson_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "lessons",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("time_slot_id", sa.Integer(), sa.ForeignKey("time_slots.id"), nullable=False),
        sa.Column("instructor_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("type", lesson_type, nullable=False),
        sa.Column("swim_style", sa.String(length=32), nullable=False),
        sa.Column("status", lesson_status, server_default="scheduled"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("time_slot_id", name="uq_lesson_time_slot"),
    )

    op.create_table(
        "lesson_students",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("lesson_id", sa.Integer(), sa.ForeignKey("lessons.id", ondelete="CASCADE")),
        sa.Column("swimmer_id", sa.Integer(), sa.ForeignKey("users.id"), index=True),
        sa.Column("swim_style", sa.String(length=32), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("lesson_id", "swimmer_id", name="uq_lesson_student"),
    )


def downgrade() -> None:
    op.drop_table("lesson_students")
    op.drop_table("lessons")
    op.drop_index("ix_time_slot_instructor_date", table_name="time_slots")
    op.drop_table("time_slots")
    op.drop_table("instructor_availability")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
    for enum_name in ("lessonstatus", "slotstatus", "lessontype", "userrole"):
        postgresql.ENUM(name=enum_name).drop(op.get_bind(), checkfirst=True)
