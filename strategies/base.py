from dataclasses import dataclass
from typing import Optional

from models import ServiceConfig, ServiceConfigAccount

ROLE_SUFFIX = "-service"


@dataclass(frozen=True)
class StrategyOutcome:
    """What a single resolution attempt produced.

    ``config`` may be set on failure too: a file that parsed but named no
    usable account still contributes its global settings.
    """

    config: Optional[ServiceConfig] = None
    account: Optional[ServiceConfigAccount] = None
    error: Optional[BaseException] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.account is not None and self.account.usable

    @classmethod
    def failed(cls, error: BaseException, config: Optional[ServiceConfig] = None) -> "StrategyOutcome":
        return cls(config=config, error=error)


class Strategy:
    name = "strategy"

    def attempt(self, base: Optional[ServiceConfig]) -> StrategyOutcome:
        raise NotImplementedError


def default_config(meta_endpoint: str, region: str, use_regional_sts: bool) -> ServiceConfig:
    return ServiceConfig(meta_endpoint=meta_endpoint, region=region, use_regional_sts=use_regional_sts)
