"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

# Lunch break assumed when a day only has morningIn and afternoonOut.
AUTO_BREAK_HOURS = 1.0

THIRTY_PERCENT_RATE = 0.30

PIN_LENGTH = 4
MIN_PASSWORD_LENGTH = 6

DEFAULT_ADMIN_ID = "admin-1"
DEFAULT_ADMIN_NAME = "System Admin"
DEFAULT_ADMIN_EMAIL = "admin@admin.com"
DEFAULT_ADMIN_PASSWORD = "pass1234"
DEFAULT_ADMIN_PIN = "0000"
DEFAULT_ADMIN_BIRTHDAY = "2000-01-01"

PAYROLL_EXPORT_FILENAME = "payroll_full_export.csv"
