"""Module clients."""
from .base import ModuleClient, ModuleDescriptor
from .jokerace import JokeraceEligibilityClient, JokeraceEligibilityInfo
from .staking import StakingEligibilityClient, StakingEligibilityInfo

__all__ = [
    "JokeraceEligibilityClient",
    "JokeraceEligibilityInfo",
    "ModuleClient",
    "ModuleDescriptor",
    "StakingEligibilityClient",
    "StakingEligibilityInfo",
]
