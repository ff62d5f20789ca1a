from functools import lru_cache
import os
from pydantic import BaseModel, Field


class Settings(BaseModel):
    env: str = Field(default="dev", alias="ENV")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    database_url: str = Field(default="", alias="DATABASE_URL")
    postgres_db: str = Field(default="swimschool", alias="POSTGRES_DB")
    postgres_user: str = Field(default="swimschool", alias="POSTGRES_USER")
    postgres_password: str = Field(default="swimschool", alias="POSTGRES_PASSWORD")
    postgres_host: str = Field(default="localhost", alias="POSTGRES_HOST")
    postgres_port: int = Field(default=5432, alias="POSTGRES_PORT")

    private_lesson_duration: int = Field(default=45, alias="PRIVATE_LESSON_DURATION")
    private_lesson_gap: int = Field(default=15, alias="PRIVATE_LESSON_GAP")
    group_lesson_duration: int = Field(default=60, alias="GROUP_LESSON_DURATION")
    group_lesson_gap: int = Field(default=0, alias="GROUP_LESSON_GAP")
    group_lesson_capacity: int = Field(default=20, alias="GROUP_LESSON_CAPACITY")

    class Config:
        populate_by_name = True

    @property
    def sqlalchemy_url(self) -> str:
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+psycopg2://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(**os.environ)
