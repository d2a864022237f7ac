from .user import SUserAuth, SUserRegister, SUserResponse, SCreatorResponse
from .course import SCourseResponse, SCourseDetailResponse, SLectureResponse
from .purchase import (
    SCheckoutSessionRequest,
    SCheckoutSessionResponse,
    SPurchaseResponse,
    SPurchasedCoursesResponse,
    SCourseWithPurchaseStatus,
)
