from datetime import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from coursepay.db import PurchaseStatus
from .course import SCourseResponse, SCourseDetailResponse


class SCheckoutSessionRequest(BaseModel):
    course_id: int
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SCheckoutSessionResponse(BaseModel):
    success: bool
    url: str


class SPurchaseResponse(BaseModel):
    id: int
    course_id: int
    user_id: int
    amount: float
    status: PurchaseStatus
    payment_id: str | None = None
    created_at: datetime
    course: SCourseResponse | None = None
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SPurchasedCoursesResponse(BaseModel):
    purchased_course: list[SPurchaseResponse] = []
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SCourseWithPurchaseStatus(BaseModel):
    course: SCourseDetailResponse
    purchased: bool
