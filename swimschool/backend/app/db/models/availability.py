from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base


class InstructorAvailability(Base):
    __tablename__ = "instructor_availability"
    __table_args__ = (
        UniqueConstraint(
            "instructor_id", "date", "start_time", name="uq_availability_instructor_start"
        ),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    instructor_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), index=True)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)

    instructor = relationship("User", back_populates="availability")
