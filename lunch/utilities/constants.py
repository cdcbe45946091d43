from typing import Final

# Retention policy for recent picks (two work-weeks)
HISTORY_LIMIT: Final[int] = 14

SEED_HEADER: Final[tuple[str, str]] = ("restaurants", "option")
MAX_NAME_LENGTH: Final[int] = 200
MAX_CATEGORY_LENGTH: Final[int] = 50
