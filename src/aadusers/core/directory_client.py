# src/aadusers/core/directory_client.py
from __future__ import annotations
from urllib.parse import quote

from aadusers.core.graph_client import GraphClient
from aadusers.core.models import DirectoryUser
from aadusers.http.errors import NotFoundError

USER_SELECT = ",".join([
    "id", "userPrincipalName", "accountEnabled", "displayName", "mail", "mailNickname",
    "usageLocation", "onPremisesImmutableId", "onPremisesSamAccountName",
    "onPremisesUserPrincipalName",
])


class AmbiguousUserError(Exception):
    """A filter lookup matched more than one user."""


def _odata_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class DirectoryClient:
    """
    User lookups against Microsoft Graph.
    Permissions: User.Read.All (or Directory.Read.All)
    Every method raises NotFoundError when no user matches.
    """
    def __init__(self, graph: GraphClient):
        self._graph = graph

    def get_by_principal_name(self, upn: str) -> DirectoryUser:
        it = self._graph.get_json(f"/users/{quote(upn, safe='@')}", params={"$select": USER_SELECT})
        return DirectoryUser.from_graph(it)

    def get_by_object_id(self, object_id: str) -> DirectoryUser:
        it = self._graph.get_json(f"/users/{quote(object_id, safe='')}", params={"$select": USER_SELECT})
        return DirectoryUser.from_graph(it)

    def get_by_mail_nickname(self, alias: str) -> DirectoryUser:
        return self._get_single_by_filter(f"mailNickname eq {_odata_literal(alias)}")

    def _get_single_by_filter(self, flt: str) -> DirectoryUser:
        params = {"$filter": flt, "$select": USER_SELECT}
        res = self._graph.get_json("/users", params=params)
        items = res.get("value", [])
        if not items:
            raise NotFoundError(404, f"/users?$filter={flt}", f"No user found matching filter {flt!r}")
        if len(items) > 1:
            raise AmbiguousUserError(f"{len(items)} users found matching filter {flt!r}")
        return DirectoryUser.from_graph(items[0])
