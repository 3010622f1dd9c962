"""
Configuration constants for wiki-path.

All URLs, rate budgets and tunable search defaults are defined here.
"""

# =============================================================================
# Wikipedia Endpoints
# =============================================================================

# Anonymous article pages (rendered HTML)
ANON_ARTICLE_URL = "https://en.wikipedia.org/wiki/"

# REST endpoint used with a personal API token
API_ARTICLE_URL = "https://en.wikipedia.org/w/rest.php/v1/page/{}/html"

# Article hrefs start with these prefixes in the respective HTML flavours
ANON_LINK_PREFIX = "/wiki/"
API_LINK_PREFIX = "./"

# Request timeout in seconds
WIKIPEDIA_TIMEOUT = 10

# User agent for requests (be a good citizen)
USER_AGENT = "WikiPath/0.1 (https://github.com/wiki-path/wiki-path)"

# =============================================================================
# Rate Limits
# =============================================================================

HOUR_SECS = 3600

# https://api.wikimedia.org/wiki/Rate_limits#Anonymous_requests
ANON_RATE_LIMIT = 500

# https://api.wikimedia.org/wiki/Rate_limits#Personal_requests
API_RATE_LIMIT = 5000

# =============================================================================
# Link Filtering
# =============================================================================

# Never followed: every article links to it
MAIN_PAGE = "Main_Page"

# Namespaced pages (Special:, Talk:, File:, ...) contain this separator
NAMESPACE_SEPARATOR = ":"

# Element id where the "External links" section begins
EXTERNAL_LINKS_ID = "External_links"

# =============================================================================
# Search Configuration
# =============================================================================

# Worker threads exploring articles concurrently
DEFAULT_MAX_WORKERS = 8

# Extra attempts for a failed fetch before the search aborts
DEFAULT_FETCH_RETRIES = 1

# =============================================================================
# Logging Configuration
# =============================================================================

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%H:%M:%S"
DEFAULT_LOG_LEVEL = "WARNING"
