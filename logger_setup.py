"""
basic logging functionality for an app built on impl_period / pdperiod

the library modules only ever call logging.getLogger(__name__) and never
attach handlers; the app decides where the records go

# usage
```python
import logging

from logger_setup import configure_logs


def main():  # or any other func
    log = configure_logs("impl_period", level=logging.DEBUG)
    log.debug("overflow records from the navigator now show up")
```

# many thanks to:
https://www.youtube.com/watch?v=-YelOky3ZRE&list=WL&index=4
"""

import logging
import logging.handlers
from pathlib import Path
import sys

MB = 1<<20
DATE_FMT = "%Y-%m-%d %H:%M:%S"
LOG_FMT = "{name} [{asctime}] {levelname} ({funcName}) - {message}"


def configure_logs(app_name: str, log_dir: Path | None = None, level: int = logging.INFO) -> logging.Logger:
    """
    stdout + rotating file handlers on the `app_name` logger

    log_dir defaults to a "logs" folder next to this module, which for an
    installed (non-editable) copy is inside site-packages: apps should pass
    their own log_dir

    calling it again swaps the handlers rather than stacking duplicates
    """
    log_path = log_dir or Path(__file__).parent / "logs"
    log_path.mkdir(parents=True, exist_ok=True)

    stream_h = logging.StreamHandler(stream=sys.stdout)
    rotating_file_h = logging.handlers.RotatingFileHandler(
        filename = log_path / "rotating.log",
        maxBytes = MB * 10,
        backupCount = 6
    )

    fmter = logging.Formatter(fmt=LOG_FMT, style="{", datefmt=DATE_FMT)
    stream_h.setFormatter(fmter)
    rotating_file_h.setFormatter(fmter)

    app_log = logging.getLogger(app_name)
    app_log.setLevel(level)

    for h in list(app_log.handlers):
        app_log.removeHandler(h)
        h.close()
    app_log.addHandler(stream_h)
    app_log.addHandler(rotating_file_h)
    return app_log
