"""
Configuration settings for the fluency ratings analytics.

Centralized configuration for aggregation parameters, paths and logging.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"

# Exported snapshot of the "ratings" table (JSON list of rows)
RATINGS_SNAPSHOT_PATH = os.getenv("RATINGS_SNAPSHOT", str(DATA_ROOT / "ratings.json"))

# Score domain for naturalness, confidence and eye contact
SCORE_MIN = 1
SCORE_MAX = 10

# Time windows (days); "all" has no cutoff
WINDOW_DAYS = {
    "7d": 7,
    "30d": 30,
    "90d": 90,
    "all": None,
}
DEFAULT_WINDOW = "30d"

# Distribution bin edges; the final bin is open above
DISTRIBUTION_EDGES = [0, 2, 4, 6, 8, 10]

# Highlights and rolling statistics
ROLLING_WINDOW_SIZE = 7  # Trend points in the rolling average
HIGHLIGHT_LIMIT = 7  # Length of best / worst lists
RECENT_RATINGS_LIMIT = 10  # Admin dashboard "Recent Ratings" table

# Activity heatmap
HEATMAP_MONTHS = 12  # Calendar months ending at the reference month

# Score bands, checked top-down (lower bound, label)
SCORE_BANDS = [
    (8, "excellent"),
    (6, "good"),
    (3, "fair"),
    (0, "poor"),
]

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "fluency_analytics.log"


# Design Rationale and Trade-offs:
#
# 1. Why module constants instead of a config file?
#    - One place for every tunable; env vars override paths and log level
#    - Trade-off: Changing bins or limits means editing this file
#
# 2. Why SCORE_BANDS as (lower bound, label) pairs checked top-down?
#    - The first bound a score reaches wins; the last entry catches the rest
