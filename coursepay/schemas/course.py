from datetime import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .user import SCreatorResponse


class SLectureResponse(BaseModel):
    id: int
    title: str
    video_url: str | None = None
    is_preview_free: bool
    position: int
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SCourseResponse(BaseModel):
    id: int
    title: str
    subtitle: str | None = None
    description: str | None = None
    category: str | None = None
    level: str | None = None
    price: float
    thumbnail: str | None = None
    is_published: bool
    creator_id: int
    created_at: datetime
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SCourseDetailResponse(SCourseResponse):
    creator: SCreatorResponse | None = None
    lectures: list[SLectureResponse] = []
