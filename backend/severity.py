from enum import IntEnum


class Severity(IntEnum):
    """Cloud Logging severities, ordered lowest to highest.

    Values match ``google.logging.type.LogSeverity`` so entries can be compared
    the same way the backend compares them.
    """
    DEFAULT = 0
    DEBUG = 100
    INFO = 200
    NOTICE = 300
    WARNING = 400
    ERROR = 500
    CRITICAL = 600
    ALERT = 700
    EMERGENCY = 800

    @property
    def is_error(self) -> bool:
        return self >= Severity.ERROR
