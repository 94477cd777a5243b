"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

BARCODE_PREFIX = "MAPH"

# Scanner check-in/check-out clock values are fixed, not the scan time.
SCAN_CHECK_IN_TIME = "09:00"
SCAN_CHECK_OUT_TIME = "16:00"

BULK_REMARKS_TEMPLATE = "Marked by management on {today}"

MIN_YEAR = 1000
MAX_YEAR = 9999
