"""School Attendance package.

Organized by feature modules (attendance, day_calendar, users) with a thin
Flask controller layer over service/repository layers. The monthly summary
engine lives in ``attendance.engine``.
"""
