# src/aadusers/core/data_source.py
from __future__ import annotations
from typing import Any, Dict, Mapping, Optional

from aadusers.core.directory_client import DirectoryClient
from aadusers.core.errors import SchemaError
from aadusers.core.models import (
    IdentifierSet, IDENTIFIER_KINDS, OBJECT_IDS,
)
from aadusers.core.result_sink import ResultSink
from aadusers.core.user_resolver import resolve
from aadusers.core.validate import is_non_empty_string, is_uuid


def parse_identifiers(raw: Mapping[str, Any]) -> IdentifierSet:
    """
    Exactly one of object_ids / user_principal_names / mail_nicknames must be
    a non-empty list. object_ids must be UUIDs; other entries non-empty strings.
    """
    supplied = [k for k in IDENTIFIER_KINDS if raw.get(k)]
    if len(supplied) != 1:
        keys = ", ".join(IDENTIFIER_KINDS)
        got = ", ".join(supplied) or "none"
        raise SchemaError("/".join(IDENTIFIER_KINDS), f"exactly one of [{keys}] must be specified (got {got})")

    kind = supplied[0]
    values = raw[kind]
    if isinstance(values, str) or not isinstance(values, (list, tuple)):
        raise SchemaError(kind, "expected a list of strings")

    check = is_uuid if kind == OBJECT_IDS else is_non_empty_string
    for i, v in enumerate(values):
        if not check(v):
            what = "a valid UUID" if kind == OBJECT_IDS else "a non-empty string"
            raise SchemaError(f"{kind}.{i}", f"expected {what}, got {v!r}")

    return IdentifierSet.of(kind, values)


def read_users(
    raw: Mapping[str, Any],
    client: DirectoryClient,
    sink: Optional[ResultSink] = None,
    *,
    skip_missing: bool = False,
) -> Dict[str, Any]:
    ignore_missing = raw.get("ignore_missing", False)
    if not isinstance(ignore_missing, bool):
        raise SchemaError("ignore_missing", f"expected a bool, got {ignore_missing!r}")

    identifiers = parse_identifiers(raw)
    result = resolve(client, identifiers, ignore_missing, sink=sink, skip_missing=skip_missing)
    return result.as_dict()
