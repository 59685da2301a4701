__all__ = ["Time", "humanize_size"]


import time

_DURATION_UNITS = [
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
]

_SIZE_UNITS = ["B", "kB", "MB", "GB", "TB", "PB"]


class Time:
    @staticmethod
    def now() -> float:
        return time.time()

    @staticmethod
    def humanize_since(timestamp: float, now: float | None = None) -> str:
        """Describe how long ago a timestamp was, e.g. ``3 days ago``."""
        current = now if now is not None else Time.now()
        elapsed = max(0, int(current - timestamp))
        if elapsed < 1:
            return "Less than a second ago"
        for name, seconds in _DURATION_UNITS:
            count = elapsed // seconds
            if count >= 1:
                suffix = "" if count == 1 else "s"
                return f"{count} {name}{suffix} ago"
        return "Less than a second ago"


def humanize_size(size_bytes: int) -> str:
    # Decimal units, as the docker CLI reports image sizes.
    size = float(size_bytes)
    for unit in _SIZE_UNITS:
        if size < 1000 or unit == _SIZE_UNITS[-1]:
            if unit == "B":
                return f"{int(size)} B"
            return f"{size:.1f} {unit}"
        size /= 1000
    return f"{size_bytes} B"
