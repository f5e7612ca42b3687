import os

DATABASE_URL = os.getenv("EXPENSES_DATABASE_URL", "sqlite+aiosqlite:///./expenses.db")
SQL_ECHO = os.getenv("EXPENSES_SQL_ECHO", "").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("EXPENSES_LOG_LEVEL", "INFO").upper()

# chart key for rows stored without a category
UNCATEGORIZED = "Uncategorized"
