# Import every mapped class so string relationships resolve.
from .lessons.models import Lesson, Vocabulary  # noqa: F401
from .progress.models import Progress  # noqa: F401
from .quiz.models import Answer, Question, Quiz, QuizResult  # noqa: F401
from .settings.models import Setting  # noqa: F401
from .users.models import User  # noqa: F401
