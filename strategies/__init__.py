from strategies.base import ROLE_SUFFIX, Strategy, StrategyOutcome
from strategies.creds import CredentialsStrategy
from strategies.env import EnvStrategy
from strategies.file import FileStrategy
from strategies.profile import ProfileStrategy


def default_strategies(config_file, meta_endpoint, use_regional_sts, region, account):
    """The resolution cascade, most trusted first."""
    return [
        FileStrategy(config_file, meta_endpoint, use_regional_sts, region, account),
        EnvStrategy(meta_endpoint, use_regional_sts, region),
        CredentialsStrategy(use_regional_sts, region, ROLE_SUFFIX),
        ProfileStrategy(meta_endpoint, ROLE_SUFFIX),
    ]


__all__ = [
    "ROLE_SUFFIX",
    "Strategy",
    "StrategyOutcome",
    "FileStrategy",
    "EnvStrategy",
    "CredentialsStrategy",
    "ProfileStrategy",
    "default_strategies",
]
