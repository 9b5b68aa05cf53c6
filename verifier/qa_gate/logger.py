import os
import re
from datetime import datetime, timezone


DEFAULT_LOG_PATH = "logs/qa-verifier.log"


def _default_log_path():
    return os.environ.get("QA_VERIFIER_LOG_PATH", DEFAULT_LOG_PATH)


def _sanitize(text):
    value = str(text)
    value = re.sub(
        r"(?i)authorization\s*[:=]\s*(?:(?:token|bearer)\s+)?[^\s,;]+",
        "Authorization=[REDACTED]",
        value,
    )
    value = re.sub(r"(?i)x-bugzilla-api-key\s*[:=]\s*[^\s,;]+", "X-BUGZILLA-API-KEY=[REDACTED]", value)
    value = re.sub(r"(?i)\b(token|bearer)\s+[A-Za-z0-9._\-]+", r"\1 [REDACTED]", value)
    value = re.sub(r"\s+", " ", value).strip()
    return value


class EventLogger:
    """Appends timestamped, sanitized lines to a log file.

    Instances are passed explicitly to every component that logs.
    """

    def __init__(self, path=None):
        self.path = path or _default_log_path()

    def log(self, component: str, message: str) -> None:
        line = (
            f"{datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')} "
            f"[{_sanitize(component)}] {_sanitize(message)}"
        )
        try:
            directory = os.path.dirname(self.path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        except Exception:
            return


class NullLogger:
    def log(self, component: str, message: str) -> None:
        return
