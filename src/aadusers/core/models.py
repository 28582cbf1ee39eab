from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

IdentifierKind = Literal["user_principal_names", "object_ids", "mail_nicknames"]

USER_PRINCIPAL_NAMES: IdentifierKind = "user_principal_names"
OBJECT_IDS: IdentifierKind = "object_ids"
MAIL_NICKNAMES: IdentifierKind = "mail_nicknames"

IDENTIFIER_KINDS = (OBJECT_IDS, USER_PRINCIPAL_NAMES, MAIL_NICKNAMES)

# Attribute-bag keys for the on-premises sync fields
ONPREM_SAM_ACCOUNT_NAME = "onPremisesSamAccountName"
ONPREM_USER_PRINCIPAL_NAME = "onPremisesUserPrincipalName"

# Graph properties mapped onto typed DirectoryUser fields; everything else is bag
_TYPED_KEYS = {
    "id", "userPrincipalName", "accountEnabled", "displayName",
    "onPremisesImmutableId", "immutableId", "mail", "mailNickname", "usageLocation",
}


@dataclass(frozen=True)
class IdentifierSet:
    kind: IdentifierKind
    values: tuple

    def __post_init__(self):
        if self.kind not in IDENTIFIER_KINDS:
            raise ValueError(f"unknown identifier kind: {self.kind!r}")
        if not self.values:
            raise ValueError(f"{self.kind} must not be empty")

    @classmethod
    def of(cls, kind: IdentifierKind, values) -> "IdentifierSet":
        return cls(kind=kind, values=tuple(values))

    def __len__(self) -> int:
        return len(self.values)


@dataclass
class DirectoryUser:
    object_id: Optional[str]
    user_principal_name: Optional[str]
    account_enabled: Optional[bool] = None
    display_name: Optional[str] = None
    immutable_id: Optional[str] = None
    mail: Optional[str] = None
    mail_nickname: Optional[str] = None
    usage_location: Optional[str] = None
    additional_properties: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_graph(cls, it: dict) -> "DirectoryUser":
        return cls(
            object_id=it.get("id"),
            user_principal_name=it.get("userPrincipalName"),
            account_enabled=it.get("accountEnabled"),
            display_name=it.get("displayName"),
            immutable_id=it.get("onPremisesImmutableId") or it.get("immutableId"),
            mail=it.get("mail"),
            mail_nickname=it.get("mailNickname"),
            usage_location=it.get("usageLocation"),
            additional_properties={k: v for k, v in it.items() if k not in _TYPED_KEYS},
        )

    def _bag_str(self, key: str) -> Optional[str]:
        v = self.additional_properties.get(key)
        return v if isinstance(v, str) else None

    @property
    def onpremises_sam_account_name(self) -> Optional[str]:
        return self._bag_str(ONPREM_SAM_ACCOUNT_NAME)

    @property
    def onpremises_user_principal_name(self) -> Optional[str]:
        return self._bag_str(ONPREM_USER_PRINCIPAL_NAME)


@dataclass
class UserRecord:
    account_enabled: Optional[bool]
    display_name: Optional[str]
    immutable_id: Optional[str]
    mail: Optional[str]
    mail_nickname: Optional[str]
    object_id: str
    onpremises_sam_account_name: Optional[str]
    onpremises_user_principal_name: Optional[str]
    usage_location: Optional[str]
    user_principal_name: str


@dataclass
class UsersResult:
    id: str
    object_ids: List[str]
    user_principal_names: List[str]
    mail_nicknames: List[Optional[str]]
    users: List[UserRecord]

    def state(self) -> Dict[str, Any]:
        """Attributes written to the result sink (identity excluded)."""
        return {
            "object_ids": list(self.object_ids),
            "user_principal_names": list(self.user_principal_names),
            "mail_nicknames": list(self.mail_nicknames),
            "users": [u.__dict__.copy() for u in self.users],
        }

    def as_dict(self) -> Dict[str, Any]:
        out = {"id": self.id}
        out.update(self.state())
        return out
