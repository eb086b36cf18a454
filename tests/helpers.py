from datetime import datetime


def at(hour: int, minute: int = 0) -> datetime:
    return datetime(2030, 6, 1, hour, minute)
