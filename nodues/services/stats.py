from sqlalchemy.orm import Session

from nodues.schemas.stats import StatsOut
from nodues.services.clearances import count_completed
from nodues.services.students import count_students


def compute_stats(db: Session) -> StatsOut:
    total = count_students(db)
    completed = count_completed(db)
    return StatsOut(
        total_students=total,
        completed_clearances=completed,
        pending_clearances=total - completed,
    )
