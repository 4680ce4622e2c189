import time
from datetime import datetime


# Current wall-clock time as whole seconds since the epoch. This is the engine's default clock.
def now_seconds():
    return int(time.time())


# Simply returns the current local time of day as HH:MM:SS, for the clock readout.
def now_hms():
    return datetime.now().strftime("%H:%M:%S")


# Formats a duration in seconds as MM:SS, or HH:MM:SS once it reaches an hour. Negative values clamp to zero.
def format_duration(seconds):
    seconds = max(0, int(seconds))
    h, rem = divmod(seconds, 3600)
    m, s = divmod(rem, 60)
    if h > 0:
        return f"{h:02d}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"
