from nodues.models.clearance import Clearance, DepartmentClearance  # noqa: F401
from nodues.models.document import Document  # noqa: F401
from nodues.models.user import User  # noqa: F401
