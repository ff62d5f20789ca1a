from pydantic import BaseModel


class UserBase(BaseModel):
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None


class Instructor(UserBase):
    id: int
    swimming_styles: list[str]

    class Config:
        from_attributes = True


class Swimmer(UserBase):
    id: int
    swimming_styles: list[str]
    preferred_lesson_type: str | None = None

    class Config:
        from_attributes = True


class SwimmerPreferencesUpdate(BaseModel):
    swimming_styles: list[str] | None = None
    preferred_lesson_type: str | None = None


class SwimmingStylesUpdate(BaseModel):
    swimming_styles: list[str]


class Availability(BaseModel):
    id: int
    date: str
    start_time: str
    end_time: str

    class Config:
        from_attributes = True
