import logging
from typing import Callable, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from arn import parse_assumed_role_arn
from errors import ArnError, ConfigError
from models import ServiceConfig, ServiceConfigAccount
from strategies.base import ROLE_SUFFIX, Strategy, StrategyOutcome

log = logging.getLogger("sia-creds")


def sts_client(use_regional_sts: bool, region: str):
    if use_regional_sts and region:
        return boto3.client("sts", region_name=region, endpoint_url=f"https://sts.{region}.amazonaws.com")
    return boto3.client("sts", region_name=region or None)


class CredentialsStrategy(Strategy):
    """Service name inferred from the role behind the local AWS credentials.

    The role must follow the ``<domain>.<service>-service`` naming convention.
    """

    name = "security credentials"

    def __init__(
        self,
        use_regional_sts: bool,
        region: str,
        suffix: str = ROLE_SUFFIX,
        client_factory: Callable = sts_client,
    ):
        self.use_regional_sts = use_regional_sts
        self.region = region
        self.suffix = suffix
        self.client_factory = client_factory

    def attempt(self, base: Optional[ServiceConfig]) -> StrategyOutcome:
        try:
            resp = self.client_factory(self.use_regional_sts, self.region).get_caller_identity()
        except (BotoCoreError, ClientError) as e:
            return StrategyOutcome.failed(ConfigError(f"unable to get caller identity: {e}"))

        arn = resp.get("Arn") or ""
        log.debug(f"Caller identity ARN: '{arn}'")
        try:
            role = parse_assumed_role_arn(arn, self.suffix)
        except ArnError as e:
            return StrategyOutcome.failed(ConfigError(f"unable to parse caller identity: {e}"))

        return StrategyOutcome(
            account=ServiceConfigAccount(account=role.account, domain=role.domain, service=role.service)
        )
