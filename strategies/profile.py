import json
from typing import Callable, Optional

import requests

from arn import parse_role_arn
from errors import ArnError, ConfigError
from metadata import get_data
from models import ServiceConfig, ServiceConfigAccount
from strategies.base import ROLE_SUFFIX, Strategy, StrategyOutcome

IAM_INFO_PATH = "/latest/meta-data/iam/info"


class ProfileStrategy(Strategy):
    """Service name inferred from the instance profile attached to the instance."""

    name = "instance profile"

    def __init__(
        self,
        meta_endpoint: str,
        suffix: str = ROLE_SUFFIX,
        fetch: Callable[[str, str], bytes] = get_data,
    ):
        self.meta_endpoint = meta_endpoint
        self.suffix = suffix
        self.fetch = fetch

    def attempt(self, base: Optional[ServiceConfig]) -> StrategyOutcome:
        try:
            info = json.loads(self.fetch(self.meta_endpoint, IAM_INFO_PATH))
        except requests.RequestException as e:
            return StrategyOutcome.failed(ConfigError(f"unable to fetch iam info: {e}"))
        except ValueError as e:
            return StrategyOutcome.failed(ConfigError(f"unable to parse iam info: {e}"))

        profile_arn = info.get("InstanceProfileArn") if isinstance(info, dict) else None
        if not isinstance(profile_arn, str) or not profile_arn:
            return StrategyOutcome.failed(ConfigError("iam info has no InstanceProfileArn"))
        try:
            role = parse_role_arn(profile_arn, "instance-profile/", self.suffix)
        except ArnError as e:
            return StrategyOutcome.failed(ConfigError(f"unable to parse profile arn: {e}"))

        return StrategyOutcome(
            account=ServiceConfigAccount(account=role.account, domain=role.domain, service=role.service)
        )
