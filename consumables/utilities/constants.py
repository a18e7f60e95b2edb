from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"
DAYS_IN_WEEK: Final[int] = 7
PING_MESSAGE: Final[str] = "System is up!"
DEFAULT_DATABASE_FILE: Final[str] = "./ConsumablesDatabase.json"
