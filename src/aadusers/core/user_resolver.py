# src/aadusers/core/user_resolver.py
from __future__ import annotations
import base64, hashlib, sys
from typing import Callable, Dict, List, Optional

from aadusers.core.directory_client import DirectoryClient
from aadusers.core.errors import (
    CountMismatchError, EmptyResultError, MissingFieldError, UserLookupError
)
from aadusers.core.models import (
    DirectoryUser, IdentifierSet, UserRecord, UsersResult,
    MAIL_NICKNAMES, OBJECT_IDS, USER_PRINCIPAL_NAMES,
)
from aadusers.core.result_sink import ResultSink
from aadusers.http.errors import NotFoundError

ID_PREFIX = "users#"


def users_identity(upns: List[str]) -> str:
    """users#<base64url(sha1(upn1-upn2-...))>; order-sensitive."""
    digest = hashlib.sha1("-".join(upns).encode("utf-8")).digest()
    return ID_PREFIX + base64.urlsafe_b64encode(digest).decode("ascii")


def _lookup_for(client: DirectoryClient, identifiers: IdentifierSet) -> Callable[[str], DirectoryUser]:
    lookups: Dict[str, Callable[[str], DirectoryUser]] = {
        USER_PRINCIPAL_NAMES: client.get_by_principal_name,
        OBJECT_IDS: client.get_by_object_id,
        MAIL_NICKNAMES: client.get_by_mail_nickname,
    }
    return lookups[identifiers.kind]


def fetch_users(
    client: DirectoryClient,
    identifiers: IdentifierSet,
    *,
    ignore_missing: bool = False,
    skip_missing: bool = False,
) -> List[DirectoryUser]:
    """
    Look up every identifier in order, one request at a time.
    With ignore_missing a not-found ends the loop early; skip_missing
    omits only the missing identifier and keeps going.
    """
    lookup = _lookup_for(client, identifiers)
    users: List[DirectoryUser] = []
    for ident in identifiers.values:
        try:
            users.append(lookup(ident))
        except NotFoundError as ex:
            if not ignore_missing:
                raise UserLookupError(ident, identifiers.kind, ex) from ex
            print(f"[user_resolver] {identifiers.kind} {ident!r} not found, ignoring", file=sys.stderr)
            if skip_missing:
                continue
            break
        except Exception as ex:
            raise UserLookupError(ident, identifiers.kind, ex) from ex
    return users


def _project(u: DirectoryUser) -> UserRecord:
    if u.object_id is None or u.user_principal_name is None:
        raise MissingFieldError(u)
    return UserRecord(
        account_enabled=u.account_enabled,
        display_name=u.display_name,
        immutable_id=u.immutable_id,
        mail=u.mail,
        mail_nickname=u.mail_nickname,
        object_id=u.object_id,
        onpremises_sam_account_name=u.onpremises_sam_account_name,
        onpremises_user_principal_name=u.onpremises_user_principal_name,
        usage_location=u.usage_location,
        user_principal_name=u.user_principal_name,
    )


def build_result(users: List[DirectoryUser]) -> UsersResult:
    oids: List[str] = []
    upns: List[str] = []
    mail_nicknames: List[Optional[str]] = []
    records: List[UserRecord] = []
    for u in users:
        rec = _project(u)
        oids.append(rec.object_id)
        upns.append(rec.user_principal_name)
        mail_nicknames.append(rec.mail_nickname)
        records.append(rec)

    return UsersResult(
        id=users_identity(upns),
        object_ids=oids,
        user_principal_names=upns,
        mail_nicknames=mail_nicknames,
        users=records,
    )


def resolve(
    client: DirectoryClient,
    identifiers: IdentifierSet,
    ignore_missing: bool = False,
    *,
    sink: Optional[ResultSink] = None,
    skip_missing: bool = False,
) -> UsersResult:
    """
    Resolve identifiers into user records and write them to sink.
    Nothing reaches the sink unless every lookup and check succeeded.
    """
    expected = len(identifiers)
    users = fetch_users(client, identifiers, ignore_missing=ignore_missing, skip_missing=skip_missing)

    if not ignore_missing and len(users) != expected:
        raise CountMismatchError(len(users), expected)
    if ignore_missing and not users:
        raise EmptyResultError()

    result = build_result(users)
    if sink is not None:
        sink.write(result.id, result.state())
    print(f"[user_resolver] resolved {len(result.users)}/{expected} users by {identifiers.kind}", file=sys.stderr)
    return result
