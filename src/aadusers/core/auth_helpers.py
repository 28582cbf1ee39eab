from __future__ import annotations
from typing import List
import msal
import requests

from aadusers.core.auth import (
    AuthError, InvalidTenantId, InvalidClientId, InvalidClientSecret,
    NetworkError, ConsentRequired
)

def build_authority(tenant_id: str) -> str:
    return f"https://login.microsoftonline.com/{tenant_id}"

def _map_msal_error(desc: str) -> AuthError:
    d = desc or ""
    if "AADSTS7000215" in d:  # invalid client secret
        return InvalidClientSecret("Invalid client secret.")
    if "AADSTS700016" in d:  # invalid client id
        return InvalidClientId("Invalid client ID or app not found.")
    if "invalid_tenant" in d or "AADSTS90002" in d:
        return InvalidTenantId("Invalid tenant ID or tenant not found.")
    if "AADSTS65001" in d or "consent_required" in d:
        return ConsentRequired("Admin consent required.")
    return AuthError(d)

def msal_acquire_token(
    client_id: str,
    client_secret: str,
    authority: str,
    *,
    scopes: List[str],
) -> str:
    try:
        app = msal.ConfidentialClientApplication(
            client_id=client_id,
            client_credential=client_secret,
            authority=authority,
        )
        res = app.acquire_token_for_client(scopes=scopes)
    except requests.exceptions.RequestException as ex:
        raise NetworkError(str(ex)) from ex
    except ValueError as ex:
        # msal validates the authority eagerly and raises ValueError for unknown tenants
        raise InvalidTenantId(str(ex)) from ex

    if "access_token" not in res:
        raise _map_msal_error(res.get("error_description", "Unknown error"))

    return res["access_token"]
