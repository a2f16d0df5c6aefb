"""Local configuration for wordsections."""

from __future__ import annotations

import os


DEFAULT_REVISION_AUTHOR = "wordsections"
DEFAULT_FETCH_TIMEOUT_S = 10.0
DEFAULT_FETCH_MAX_RETRIES = 2
DEFAULT_FETCH_BACKOFF_S = 0.5
DEFAULT_USER_AGENT = "wordsections/0.1"
DEFAULT_LOG_LEVEL = "WARNING"

# Author recorded on tracked insertions and deletions.
WORDSECTIONS_REVISION_AUTHOR = os.getenv("WORDSECTIONS_REVISION_AUTHOR", DEFAULT_REVISION_AUTHOR)
WORDSECTIONS_FETCH_TIMEOUT_S = float(os.getenv("WORDSECTIONS_FETCH_TIMEOUT_S", str(DEFAULT_FETCH_TIMEOUT_S)))
WORDSECTIONS_FETCH_MAX_RETRIES = int(os.getenv("WORDSECTIONS_FETCH_MAX_RETRIES", str(DEFAULT_FETCH_MAX_RETRIES)))
WORDSECTIONS_FETCH_BACKOFF_S = float(os.getenv("WORDSECTIONS_FETCH_BACKOFF_S", str(DEFAULT_FETCH_BACKOFF_S)))
WORDSECTIONS_USER_AGENT = os.getenv("WORDSECTIONS_USER_AGENT", DEFAULT_USER_AGENT)
WORDSECTIONS_LOG_LEVEL = os.getenv("WORDSECTIONS_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
