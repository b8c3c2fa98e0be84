from typing import Optional

from pydantic import ValidationError

from errors import ConfigError
from models import ConfigFile, ServiceConfig, ServiceConfigAccount
from strategies.base import Strategy, StrategyOutcome


class FileStrategy(Strategy):
    """Identity explicitly declared by the operator in the sia_config file."""

    name = "config file"

    def __init__(self, config_file: str, meta_endpoint: str, use_regional_sts: bool, region: str, account: str):
        self.config_file = config_file
        self.meta_endpoint = meta_endpoint
        self.use_regional_sts = use_regional_sts
        self.region = region
        self.account = account

    def _load(self) -> ConfigFile:
        try:
            with open(self.config_file, "r", encoding="utf-8") as f:
                raw = f.read()
        except OSError as e:
            raise ConfigError(f"unable to read '{self.config_file}': {e}") from e
        try:
            return ConfigFile.model_validate_json(raw)
        except ValidationError as e:
            raise ConfigError(f"unable to parse '{self.config_file}': {e}") from e

    def attempt(self, base: Optional[ServiceConfig]) -> StrategyOutcome:
        try:
            parsed = self._load()
        except ConfigError as e:
            return StrategyOutcome.failed(e)

        config = ServiceConfig(
            version=parsed.version,
            service=parsed.service,
            services=tuple(parsed.services),
            accounts=tuple(
                ServiceConfigAccount(
                    account=a.account, domain=a.domain, service=parsed.service, user=a.user, group=a.group
                )
                for a in parsed.accounts
            ),
            meta_endpoint=self.meta_endpoint,
            region=self.region,
            use_regional_sts=self.use_regional_sts or parsed.regional_sts,
            san_dns_wildcard=parsed.sandns_wildcard,
            san_dns_hostname=parsed.sandns_hostname,
            key_dir=parsed.key_dir,
            cert_dir=parsed.cert_dir,
        )

        if not config.service:
            return StrategyOutcome.failed(ConfigError("service name not specified in config file"), config)

        for entry in config.accounts:
            if entry.account != self.account:
                continue
            if not entry.domain:
                return StrategyOutcome.failed(ConfigError(f"missing domain for account {self.account}"), config)
            return StrategyOutcome(config=config, account=entry)

        return StrategyOutcome.failed(
            ConfigError(f"missing account {self.account!r} details from config file"), config
        )
