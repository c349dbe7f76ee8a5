DATA_FILE_NAME = ".tasks.csv"
CONFIG_FILE_NAME = ".tasks.yaml"

DATA_FILE_ENV = "TASKS_FILE"
LOG_LEVEL_ENV = "TASKS_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

CSV_HEADER = ("ID", "Description", "CreatedAt", "IsCompleted")

# msvcrt locks a byte range rather than the whole file.
WINDOWS_LOCK_BYTES = 1 << 30
