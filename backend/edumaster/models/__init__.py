# Import all models so Base.metadata is populated for create_all.
from edumaster.models.user import User, UserRole  # noqa: F401
from edumaster.models.session import Session  # noqa: F401
from edumaster.models.audit import AuditLogEvent  # noqa: F401
from edumaster.models.course import Course, Lesson, Section  # noqa: F401
from edumaster.models.enrollment import Enrollment, Progress  # noqa: F401
from edumaster.models.quiz import Attempt, Question, Quiz, QuizType  # noqa: F401
from edumaster.models.review import Review  # noqa: F401
