from .base import (
    Base,
    get_async_db_session,
    async_session_maker,
)
from .user import User, UserRole
from .course import Course
from .lecture import Lecture
from .course_purchase import CoursePurchase, PurchaseStatus
from .secondaries import user_course
