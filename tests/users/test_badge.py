from src.school_attendance.school_attendance.core.enums import Role
from src.school_attendance.school_attendance.users.badge import render_badge_png
from src.school_attendance.school_attendance.users.model import User


def test_barcode_prefers_employee_id():
    assert User(user_id=1, userid="60432", name="A", role=Role.STUDENT).barcode == "MAPH60432"
    assert User(user_id=2, userid="70110", name="B", role=Role.STAFF, employee_id="MAPH-T-7").barcode == "MAPH-T-7"


def test_render_badge_png_returns_png_bytes():
    png = render_badge_png(User(user_id=1, userid="60432", name="A", role=Role.STUDENT))
    assert png.startswith(b"\x89PNG\r\n\x1a\n")
