"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

FULL_DAY_HOURS = 6
HALF_DAY_HOURS = 3
OVERTIME_THRESHOLD_HOURS = 8

WEEKEND_DAY_NAME = "Sunday"

# Week-off escalation: a Sunday W/O turns into A when at least
# ESCALATION_ABSENCE_THRESHOLD of the previous ESCALATION_LOOKBACK_DAYS are A.
ESCALATION_LOOKBACK_DAYS = 6
ESCALATION_ABSENCE_THRESHOLD = 4
LOOKBACK_BUFFER_DAYS = 7

# Weekly presence rule: worked days (>= HALF_DAY_HOURS) needed before a Sunday.
WEEKLY_PRESENCE_THRESHOLD = 4

OFFICE_ROLES = frozenset({"admin", "super_admin", "hr", "finance"})
EXCLUDED_REPORT_ROLES = frozenset({"management"})

WORK_FROM_HOME_MARKER = "work from home"

DEFAULT_FETCH_WORKERS = 3

DEFAULT_FIXED_HOLIDAYS = (
    {"name": "New Year", "date": "01-01"},
    {"name": "Republic Day", "date": "01-26"},
    {"name": "May Day", "date": "05-01"},
    {"name": "Independence Day", "date": "08-15"},
    {"name": "Gandhi Jayanti", "date": "10-02"},
    {"name": "Karnataka Rajyotsava", "date": "11-01"},
)

HOLIDAY_SELECTION_POOL = (
    {"name": "Uttarayana Punyakala, Makara Sankranti Festival", "date": "-01-15"},
    {"name": "Ugadi Festival", "date": "-03-19"},
    {"name": "Khutub-E-Ramzan", "date": "-03-21"},
    {"name": "Mahaveera Jayanthi", "date": "-03-31"},
    {"name": "Good Friday", "date": "-04-03"},
    {"name": "Dr. B.R. Ambedkar Jayanthi", "date": "-04-14"},
    {"name": "Basava Jayanthi, Akshaya Tritiya", "date": "-04-20"},
    {"name": "Bakrid", "date": "-05-28"},
    {"name": "Last Day of Moharam", "date": "-06-26"},
    {"name": "Eid-Milad", "date": "-08-26"},
    {"name": "Varasiddhi Vinayaka Vrata", "date": "-09-14"},
    {"name": "Mahanavami, Ayudhapooja", "date": "-10-20"},
    {"name": "Vijayadasami", "date": "-10-21"},
    {"name": "Balipadyami, Deepavali", "date": "-11-10"},
    {"name": "Kanakadasa Jayanthi", "date": "-11-27"},
    {"name": "Christmas", "date": "-12-25"},
)
