from .form_1040 import Form1040
from .form_1040v import Form1040V
from .form_4562 import Form4562
from .form_6251 import Form6251
from .form_8829 import Form8829
from .form_8889 import Form8889
from .form_8938 import Form8938
from .form_8959 import Form8959
from .form_8960 import Form8960
from .form_8995 import Form8995
from .form_8995a import Form8995A
from .schedule_1 import Schedule1
from .schedule_1a import Schedule1A
from .schedule_2 import Schedule2
from .schedule_3 import Schedule3
from .schedule_8812 import Schedule8812
from .schedule_a import ScheduleA
from .schedule_b import ScheduleB
from .schedule_c import ScheduleC
from .schedule_d import ScheduleD
from .schedule_eic import ScheduleEIC
from .schedule_se import ScheduleSE

# Root first; the rest in the order ties on sequence index are broken.
FEDERAL_CATALOG = (
    Form1040,
    Form1040V,
    Schedule1,
    Schedule1A,
    Schedule2,
    Schedule3,
    ScheduleA,
    ScheduleB,
    ScheduleC,
    ScheduleD,
    ScheduleSE,
    ScheduleEIC,
    Schedule8812,
    Form8889,
    Form8995,
    Form8995A,
    Form6251,
    Form8829,
    Form4562,
    Form8959,
    Form8960,
    Form8938,
)

__all__ = [
    "FEDERAL_CATALOG",
    "Form1040",
    "Form1040V",
    "Form4562",
    "Form6251",
    "Form8829",
    "Form8889",
    "Form8938",
    "Form8959",
    "Form8960",
    "Form8995",
    "Form8995A",
    "Schedule1",
    "Schedule1A",
    "Schedule2",
    "Schedule3",
    "Schedule8812",
    "ScheduleA",
    "ScheduleB",
    "ScheduleC",
    "ScheduleD",
    "ScheduleEIC",
    "ScheduleSE",
]
