from nodues.schemas.common import CamelModel


class StatsOut(CamelModel):
    total_students: int
    completed_clearances: int
    pending_clearances: int
