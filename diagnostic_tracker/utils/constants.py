"""
Constants for the Diagnostic Progress Tracker.

This module contains all magic numbers, string identifiers, and configuration
values used throughout the application. Centralizing these makes the codebase
easier to maintain and tune.
"""

from typing import Dict, List, Set, Tuple


# =============================================================================
# STORAGE
# =============================================================================

# Single slot holding the whole dashboard document
DASHBOARD_STORAGE_KEY = "nblk_dashboard_data"

# Environment variables read by the backing store factory
ENV_STORE_URL = "DASHBOARD_STORE_URL"
ENV_DATABASE_URL = "DATABASE_URL"
ENV_QUESTION_BANK_PATH = "QUESTION_BANK_PATH"

DEFAULT_STORE_URL = "file://./dashboard_data"

STORE_SCHEME_MEMORY = "memory"
STORE_SCHEME_FILE = "file"
STORE_SCHEMES_POSTGRES: Set[str] = {"postgres", "postgresql"}

# psycopg2 pool bounds
PG_POOL_MIN_CONNECTIONS = 1
PG_POOL_MAX_CONNECTIONS = 10


# =============================================================================
# ACTIVITY LOG
# =============================================================================

ACTIVITY_LOG_CAPACITY = 50          # Oldest records evicted beyond this
ACTIVITY_DEDUP_WINDOW_MS = 5000     # Same type + tool within 5s is dropped
DEFAULT_RECENT_ACTIVITY_LIMIT = 10

# Dashboard re-reads the document on this cadence
DASHBOARD_POLL_INTERVAL_SECONDS = 2


# =============================================================================
# DIAGNOSTICS
# =============================================================================

DIAGNOSTIC_MARKETING = "Marketing Effectiveness Diagnostic"
DIAGNOSTIC_DATA_HYGIENE = "Data Hygiene & Business Clarity Diagnostic"
DIAGNOSTIC_CASH_FLOW = "Cash Flow & Financial Clarity Diagnostic"

# Diagnostics offered by the product (drives total_diagnostics)
DIAGNOSTIC_CATALOG: List[str] = [
    DIAGNOSTIC_MARKETING,
    DIAGNOSTIC_DATA_HYGIENE,
    DIAGNOSTIC_CASH_FLOW,
]

ANSWER_YES = "Yes"
ANSWER_NO = "No"

MAX_SCORE = 100


# =============================================================================
# REPORT MESSAGES
# =============================================================================

# (minimum score, message), checked top to bottom
SCORE_MESSAGES: List[Tuple[int, str]] = [
    (80, "Your business shows strong performance with room for strategic improvements"),
    (60, "Your business shows good performance with several areas for improvement"),
    (40, "Your business has opportunities for improvement and growth"),
    (0, "Your business has significant opportunities for improvement and growth"),
]

DIAGNOSTIC_NAME_SUFFIX = " Diagnostic"


# =============================================================================
# TIME FORMATTING
# =============================================================================

MS_PER_SECOND = 1000
MS_PER_HOUR = 60 * 60 * MS_PER_SECOND
HOURS_PER_DAY = 24

# Activity descriptions, formatted with tool_name / phase / score
ACTIVITY_DESCRIPTIONS: Dict[str, str] = {
    'phase_completed': "Completed phase assessment: {phase}",
    'diagnostic_started': "Started {tool_name}",
    'diagnostic_completed': "Completed {tool_name} with a score of {score}%",
    'report_requested': "Requested report for {tool_name}",
    'report_downloaded': "Downloaded report for {tool_name}",
}
