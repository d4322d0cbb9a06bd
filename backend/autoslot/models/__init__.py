from autoslot.models.availability import (  # noqa: F401
    AvailabilityState,
    ClassAvailability,
    SubjectAvailability,
    TeacherAvailability,
)
from autoslot.models.lesson import (  # noqa: F401
    TimetableLesson,
    TimetableLessonClass,
    TimetableLessonTeacher,
)
from autoslot.models.period import Period  # noqa: F401
from autoslot.models.room import Room, RoomType  # noqa: F401
from autoslot.models.school import SchoolClass, Subject, Teacher  # noqa: F401
from autoslot.models.timetable_slot import (  # noqa: F401
    TimetableSlot,
    TimetableSlotClass,
    TimetableSlotTeacher,
)
