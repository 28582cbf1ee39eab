import pytest

from aadusers.core.models import DirectoryUser
from aadusers.http.errors import NotFoundError


def make_user(upn, oid, nickname=None, **extra):
    bag = extra.pop("additional_properties", {})
    return DirectoryUser(
        object_id=oid,
        user_principal_name=upn,
        mail_nickname=nickname,
        additional_properties=bag,
        **extra,
    )


class FakeDirectory:
    """In-memory stand-in for DirectoryClient that records every lookup."""

    def __init__(self, users, errors=None):
        self.users = list(users)
        self.errors = dict(errors or {})
        self.calls = []

    def _find(self, method, ident, attr):
        self.calls.append((method, ident))
        if ident in self.errors:
            raise self.errors[ident]
        for u in self.users:
            if getattr(u, attr) == ident:
                return u
        raise NotFoundError(404, f"/users/{ident}", "Not Found")

    def get_by_principal_name(self, upn):
        return self._find("upn", upn, "user_principal_name")

    def get_by_object_id(self, oid):
        return self._find("oid", oid, "object_id")

    def get_by_mail_nickname(self, alias):
        return self._find("nick", alias, "mail_nickname")


@pytest.fixture
def alice():
    return make_user(
        "alice@contoso.com", "11111111-1111-1111-1111-111111111111", "alice",
        account_enabled=True, display_name="Alice Example", mail="alice@contoso.com",
        usage_location="NZ", immutable_id="aW1tdXRhYmxl",
        additional_properties={
            "onPremisesSamAccountName": "alice.ex",
            "onPremisesUserPrincipalName": "alice@corp.local",
        },
    )


@pytest.fixture
def bob():
    return make_user("bob@contoso.com", "22222222-2222-2222-2222-222222222222", "bob",
                     account_enabled=False, display_name="Bob Example")


@pytest.fixture
def carol():
    return make_user("carol@contoso.com", "33333333-3333-3333-3333-333333333333", None)


@pytest.fixture
def directory(alice, bob, carol):
    return FakeDirectory([alice, bob, carol])
