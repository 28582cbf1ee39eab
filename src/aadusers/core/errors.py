from __future__ import annotations
from typing import Any


class ResolveError(Exception):
    code = "resolve_error"; hint = "User resolution failed."
    def __init__(self, message: str = "", *, hint: str | None = None):
        super().__init__(message or self.__class__.__name__)
        if hint: self.hint = hint


class UserLookupError(ResolveError):
    code = "lookup_failed"; hint = "Check the identifier and the app's User.Read.All consent."

    def __init__(self, identifier: str, kind: str, cause: BaseException):
        self.identifier = identifier
        self.kind = kind
        self.cause = cause
        label = {
            "user_principal_names": "user principal name",
            "object_ids": "object ID",
            "mail_nicknames": "email alias",
        }.get(kind, kind)
        super().__init__(f"Error finding user with {label} {identifier!r}: {cause}")


class CountMismatchError(ResolveError):
    code = "count_mismatch"; hint = "Set ignore_missing to tolerate users that do not exist."

    def __init__(self, got: int, expected: int):
        self.got = got
        self.expected = expected
        super().__init__(f"Unexpected number of users returned ({got} != {expected})")


class EmptyResultError(ResolveError):
    code = "empty_result"; hint = "None of the requested users exist."

    def __init__(self):
        super().__init__("No users were returned")


class MissingFieldError(ResolveError):
    code = "missing_field"; hint = "Directory returned a user without id or userPrincipalName."

    def __init__(self, record: Any):
        self.record = record
        super().__init__(f"User with nil object ID or user principal name was found: {record!r}")


class SchemaError(ValueError):
    """Raw data-source input failed validation."""
    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"{key}: {message}")
