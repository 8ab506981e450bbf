"""
Configuration constants and settings for HN Leaderboard.
"""

# Hacker News API settings
HN_API_BASE_URL = "https://hacker-news.firebaseio.com/v0"
HN_TOP_STORIES_ENDPOINT = "/topstories.json"
HN_ITEM_ENDPOINT = "/item/{}.json"

# HTTP settings
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
)
REQUEST_TIMEOUT = 10

# Ranking settings
DEFAULT_STORY_LIMIT = 30
TOP_COMMENTERS_COUNT = 10

# Failure handling
MAX_NUMBER_OF_RETRIES = 3
RETRY_DELAY = 1.5  # seconds before a full re-run
SLOW_WARNING_AFTER = 8  # seconds before the slowness advisory

# Console output
STORIES_TABLE_HEADER = ["Story title", "Score"]
COMMENTERS_TABLE_HEADER = ["User name", "Total comments"]

FATAL_MESSAGE = (
    "Looks like something went wrong while aggregating the data. "
    "Maybe a human will be able to do something about it."
)
RETRY_MESSAGE = (
    "Hmm. Looks like the API didn't want us to get results back. "
    "We're gonna retry in {delay:g} seconds. ({attempt} out of {max_retries})."
)
SLOW_MESSAGE = (
    "The Hacker News API is taking its time today. "
    "Hang on, results are still on their way..."
)
