"""Constants and defaults.

Note: Keep policy constants here to avoid magic numbers spread across code.
"""

EARTH_RADIUS_KM = 6371.0

# Check-ins farther than this from the client still succeed, with a warning.
FAR_FROM_CLIENT_KM = 0.5
FAR_FROM_CLIENT_WARNING = "You are far from the client location"

WEEKLY_STATS_DAYS = 7

DATE_FORMAT = "%Y-%m-%d"
