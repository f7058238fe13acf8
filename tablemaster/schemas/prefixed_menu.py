from datetime import datetime
from pydantic import BaseModel, field_validator


class CourseItem(BaseModel):
    id: str
    name: str | None = None


class Course(BaseModel):
    course: str
    items: list[CourseItem] = []


def _require_items(courses: list[Course] | None) -> list[Course] | None:
    if courses is not None and not any(c.items for c in courses):
        raise ValueError("Select at least one item to build the menu")
    return courses


class PrefixedMenuCreate(BaseModel):
    name: str = "Pre-Fixed Menu"
    courses: list[Course]

    @field_validator("courses")
    @classmethod
    def check_courses(cls, value: list[Course]) -> list[Course]:
        return _require_items(value)


class PrefixedMenuUpdate(BaseModel):
    name: str | None = None
    courses: list[Course] | None = None

    @field_validator("courses")
    @classmethod
    def check_courses(cls, value: list[Course] | None) -> list[Course] | None:
        return _require_items(value)


class PrefixedMenuResponse(BaseModel):
    id: str
    name: str
    courses: list[Course]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
