"""Project-wide named constants.

Scoring points and thresholds live in ``alumsearch.config.ScoringWeights``
so they can be tuned; the values here are fixed vocabulary and URLs.
"""

# Season words picked up by yearish extraction. Each is normalized before
# matching, so "j-term" and "j term" collapse to the same token.
SEASON_WORDS: tuple[str, ...] = (
    "spring",
    "summer",
    "fall",
    "autumn",
    "winter",
    "j term",
    "j-term",
    "jterm",
    "may term",
    "may-term",
    "mayterm",
)

# Categorical prefix stripped from program names when building aliases
# ("ACTion: Slovakia" -> "Slovakia").
PROGRAM_PREFIX_PATTERN: str = r"^action[:\s]+"

# Festival strings are split into fragments on colon, em-dash or hyphen.
FESTIVAL_SPLIT_PATTERN: str = "[:—-]"

HEADSHOT_KIND: str = "headshot"

# File-id headshots are served through the Drive thumbnail endpoint.
HEADSHOT_FILE_URL_TEMPLATE: str = "https://drive.google.com/thumbnail?id={file_id}&sz=w1000"

DEFAULT_HEADSHOT_URL: str = "/images/default-headshot.png"

# Strings accepted as "true" for the is-current flag (case-insensitive).
TRUTHY_STRINGS: frozenset[str] = frozenset({"true", "t", "yes", "y", "1"})

DEBOUNCE_SECONDS: float = 0.25

DEFAULT_MAX_SECONDARY: int = 50
