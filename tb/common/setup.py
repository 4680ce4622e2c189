import os
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create a directory (and its parents) if it's missing.
def ensure_directory(path: Path):
    path.mkdir(parents=True,exist_ok=True)
    return path

# Dataclass for accessing paths across program. Timer Ball keeps no session state on disk, so the data folder
# only ever holds logs.
@dataclass(frozen=True)
class ProjectPaths:

    data: Path
    logs: Path

    # Resolution order is TIMERBALL_HOME, then %APPDATA%/TimerBall, then ~/.local/share/timerball.
    @staticmethod
    def build():
        override = os.getenv("TIMERBALL_HOME")
        appdata = os.getenv("APPDATA")
        if override:
            data = Path(override)
        elif appdata:
            data = Path(appdata) / "TimerBall"
        else:
            data = Path.home() / ".local" / "share" / "timerball"
        data = ensure_directory(data)

        logs = ensure_directory(data / "logs")

        return ProjectPaths(
            data = data,
            logs = logs,
        )
PATHS = ProjectPaths.build()
