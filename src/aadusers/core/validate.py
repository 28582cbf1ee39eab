from __future__ import annotations
import re

_UUID_RE = re.compile(r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$")


def is_uuid(value) -> bool:
    return isinstance(value, str) and bool(_UUID_RE.fullmatch(value))


def is_non_empty_string(value) -> bool:
    return isinstance(value, str) and value.strip() != ""
