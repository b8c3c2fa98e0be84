import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

# RFC3339: mandatory time zone, optional fractional seconds
RFC3339 = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})")

_datetime = TypeAdapter(datetime)


def parse_rfc3339(value) -> Optional[datetime]:
    """Parse an RFC3339 timestamp into a UTC datetime, or None if it isn't one."""
    if not isinstance(value, str) or not RFC3339.fullmatch(value):
        return None
    try:
        return _datetime.validate_python(value).astimezone(timezone.utc)
    except ValidationError:
        return None


class InstanceIdentityDocument(BaseModel):
    """The fields of the EC2 instance identity document the agent relies on."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    account_id: str = Field(default="", alias="accountId")
    region: str = ""
    instance_id: str = Field(default="", alias="instanceId")
    pending_time: Optional[datetime] = Field(default=None, alias="pendingTime")

    @field_validator("account_id", "region", "instance_id", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return "" if v is None else v

    @field_validator("pending_time", mode="before")
    @classmethod
    def _parse_pending_time(cls, v):
        return parse_rfc3339(v)


@dataclass(frozen=True)
class IdentityEvidence:
    document: bytes
    signature: bytes
    account_id: str
    instance_id: str
    region: str
    pending_time: Optional[datetime] = None


@dataclass(frozen=True)
class ServiceConfigAccount:
    account: str = ""
    domain: str = ""
    service: str = ""
    user: str = ""
    group: str = ""

    @property
    def name(self) -> str:
        return f"{self.domain}.{self.service}"

    @property
    def usable(self) -> bool:
        return bool(self.account and self.domain and self.service)


@dataclass(frozen=True)
class ServiceConfig:
    version: str = ""
    service: str = ""
    services: Tuple[str, ...] = ()
    accounts: Tuple[ServiceConfigAccount, ...] = ()
    meta_endpoint: str = ""
    region: str = ""
    use_regional_sts: bool = False
    san_dns_wildcard: bool = False
    san_dns_hostname: bool = False
    key_dir: str = ""
    cert_dir: str = ""


# sia_config file schema


class AccountEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    account: str = ""
    domain: str = ""
    user: str = ""
    group: str = ""


class ConfigFile(BaseModel):
    model_config = ConfigDict(extra="ignore")

    version: str = ""
    service: str = ""
    services: Dict[str, dict] = Field(default_factory=dict)
    accounts: List[AccountEntry] = Field(default_factory=list)
    sandns_wildcard: bool = False
    sandns_hostname: bool = False
    regional_sts: bool = False
    key_dir: str = ""
    cert_dir: str = ""
