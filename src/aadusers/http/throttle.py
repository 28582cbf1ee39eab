# src/aadusers/http/throttle.py
import random
import time

# Statuses we retry
RETRY_STATUSES = {429, 502, 503, 504}

# Upper bound for a single wait, including server-provided Retry-After
MAX_SLEEP_SECONDS = 60

def compute_sleep_seconds(attempt: int, retry_after_header: str | None) -> float:
    # Honor Retry-After (integer seconds)
    if retry_after_header and retry_after_header.strip().isdigit():
        return min(int(retry_after_header.strip()), MAX_SLEEP_SECONDS)
    base = min(2 ** attempt, 8)  # 1,2,4,8 cap
    return base * (0.6 + 0.8 * random.random())  # jitter 60–140%

def sleep_backoff(seconds: float) -> None:
    if seconds > 0:
        time.sleep(seconds)
