from boothdesk.services import (
    activity_log_service,
    checkin_service,
    report_service,
    staff_service,
    task_service,
)


__all__ = [
    "activity_log_service",
    "checkin_service",
    "report_service",
    "staff_service",
    "task_service",
]
