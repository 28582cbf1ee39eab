from __future__ import annotations
import sys
from dataclasses import dataclass

class AuthError(Exception):
    code = "auth_error"; hint = "Unknown error."
    def __init__(self, message: str = "", *, hint: str | None = None):
        super().__init__(message or self.__class__.__name__)
        if hint: self.hint = hint

class InvalidTenantId(AuthError):
    code = "invalid_tenant_id"; hint = "Tenant ID invalid or unreachable."
class InvalidClientId(AuthError):
    code = "invalid_client_id"; hint = "Client ID invalid."
class InvalidClientSecret(AuthError):
    code = "invalid_client_secret"; hint = "Client Secret rejected."
class NetworkError(AuthError):
    code = "network_error"; hint = "Network or timeout issue."
class ConsentRequired(AuthError):
    code = "consent_required"; hint = "Admin consent required for User.Read.All."

@dataclass
class TenantSession:
    tenant_id: str
    client_id: str
    token: str

def connect(creds: dict, *, graph_base: str = "https://graph.microsoft.com") -> TenantSession:
    tenant_id = (creds.get("tenant_id") or "").strip()
    client_id = (creds.get("client_id") or "").strip()
    client_secret = (creds.get("client_secret") or "").strip()

    if not tenant_id: raise InvalidTenantId("Tenant ID required.")
    if not client_id: raise InvalidClientId("Client ID required.")
    if not client_secret: raise InvalidClientSecret("Client Secret required.")

    # helpers do the heavy lifting
    from aadusers.core.auth_helpers import build_authority, msal_acquire_token

    print(f"[auth] Tenant={tenant_id}, Client={client_id[:6]}..., acquiring app token", file=sys.stderr)
    token = msal_acquire_token(
        client_id, client_secret, build_authority(tenant_id), scopes=[f"{graph_base}/.default"]
    )
    return TenantSession(tenant_id=tenant_id, client_id=client_id, token=token)
