"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

DEFAULT_API_PREFIX = "/api"
DEFAULT_POOL_SIZE = 5
# Seconds a request waits for a free pooled connection.
DEFAULT_POOL_TIMEOUT = 10.0
DEFAULT_COLLEGE = "Malnad College of Engineering"
GENERATED_TEAM_ID_PREFIX = "HACK"
MAX_TEAM_MEMBERS = 4
# Column widths in database/schema.sql
MAX_TEAM_ID_LENGTH = 32
MAX_TEAM_NAME_LENGTH = 255
EXPORT_SHEET_NAME = "Attendance"
EXPORT_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
