import logging
from typing import Optional, Sequence, Tuple

from errors import ConfigError, ConfigResolutionFailed
from models import ServiceConfig, ServiceConfigAccount
from strategies import Strategy, StrategyOutcome, default_strategies
from strategies.base import default_config

log = logging.getLogger("sia-resolver")


def run_strategy(strategy: Strategy, base: Optional[ServiceConfig]) -> StrategyOutcome:
    try:
        outcome = strategy.attempt(base)
    except Exception as e:
        log.exception("Resolution strategy '%s' crashed", strategy.name)
        return StrategyOutcome.failed(e)
    if outcome.error is None and not outcome.succeeded:
        return StrategyOutcome.failed(ConfigError(f"{strategy.name} yielded an empty account"), outcome.config)
    return outcome


def resolve_config(
    config_file: str,
    meta_endpoint: str,
    use_regional_sts: bool,
    region: str,
    account: str,
    strategies: Optional[Sequence[Strategy]] = None,
) -> Tuple[ServiceConfig, ServiceConfigAccount]:
    """Resolve the service identity this instance should assume.

    Strategies are tried in order and the first success wins. The account
    always comes from the winning strategy, while the global config is the
    latest one any attempt produced, even a failed one.
    """
    if strategies is None:
        strategies = default_strategies(config_file, meta_endpoint, use_regional_sts, region, account)

    config: Optional[ServiceConfig] = None
    last_error: Optional[BaseException] = None
    for strategy in strategies:
        outcome = run_strategy(strategy, config)
        if outcome.config is not None:
            config = outcome.config
        if outcome.succeeded:
            log.info("Service %s resolved from %s", outcome.account.name, strategy.name)
            if config is None:
                config = default_config(meta_endpoint, region, use_regional_sts)
            return config, outcome.account
        last_error = outcome.error
        log.warning("Unable to resolve service from %s: %s", strategy.name, outcome.error)

    if last_error is None:
        last_error = ConfigError("no resolution strategies configured")
    raise ConfigResolutionFailed(f"unable to determine service name: {last_error}", last_error) from last_error
