import dataclasses
import os
from typing import Mapping, Optional

from arn import parse_role_arn
from errors import ArnError, ConfigError
from models import ServiceConfig, ServiceConfigAccount
from strategies.base import Strategy, StrategyOutcome, default_config

ROLE_ARN_ENV = "ATHENZ_SIA_IAM_ROLE_ARN"

# env var -> ServiceConfig field
BOOL_SETTINGS = {
    "ATHENZ_SIA_SANDNS_WILDCARD": "san_dns_wildcard",
    "ATHENZ_SIA_SANDNS_HOSTNAME": "san_dns_hostname",
    "ATHENZ_SIA_REGIONAL_STS": "use_regional_sts",
}
STR_SETTINGS = {
    "ATHENZ_SIA_KEY_DIR": "key_dir",
    "ATHENZ_SIA_CERT_DIR": "cert_dir",
}


def parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "y", "on")


class EnvStrategy(Strategy):
    """Identity taken from ATHENZ_SIA_* variables in the process environment."""

    name = "environment"

    def __init__(
        self,
        meta_endpoint: str,
        use_regional_sts: bool,
        region: str,
        environ: Mapping[str, str] = os.environ,
    ):
        self.meta_endpoint = meta_endpoint
        self.use_regional_sts = use_regional_sts
        self.region = region
        self.environ = environ

    def overlay(self, base: Optional[ServiceConfig]) -> ServiceConfig:
        config = base or default_config(self.meta_endpoint, self.region, self.use_regional_sts)
        changes = {}
        for var, field in BOOL_SETTINGS.items():
            if self.environ.get(var):
                changes[field] = parse_bool(self.environ[var])
        for var, field in STR_SETTINGS.items():
            if self.environ.get(var):
                changes[field] = self.environ[var]
        return dataclasses.replace(config, **changes)

    def attempt(self, base: Optional[ServiceConfig]) -> StrategyOutcome:
        config = self.overlay(base)

        role_arn = self.environ.get(ROLE_ARN_ENV, "")
        if not role_arn:
            return StrategyOutcome.failed(ConfigError(f"{ROLE_ARN_ENV} is not set"), config)
        try:
            role = parse_role_arn(role_arn, "role/")
        except ArnError as e:
            return StrategyOutcome.failed(ConfigError(f"unable to parse {ROLE_ARN_ENV}: {e}"), config)

        account = ServiceConfigAccount(
            account=role.account,
            domain=role.domain,
            service=role.service,
            user=self.environ.get("ATHENZ_SIA_USER", ""),
            group=self.environ.get("ATHENZ_SIA_GROUP", ""),
        )
        if not config.service:
            config = dataclasses.replace(config, service=role.service)
        return StrategyOutcome(config=config, account=account)
