import os

# Search
MAX_RESULTS: int = 10
DEBOUNCE_MS: int = 300     # quiet period before a typed query is evaluated

# Corpus asset
EXPECTED_KURALS: int = 1330
CORPUS_FILE: str = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "tirukkural.json")
CORPUS_ROUTE: str = "/tirukkural.json"

# /* ~~~ seconds to wait when the corpus source is an http(s) URL ~~~ */
FETCH_TIMEOUT: float = 10.0

SEARCH_ERROR_MESSAGE: str = "An error occurred while searching. Please try again."
LOAD_ERROR_MESSAGE: str = "Failed to load Tirukkural data. Please try again later."
