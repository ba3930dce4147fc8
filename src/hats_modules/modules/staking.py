"""Staking Eligibility module client."""

from __future__ import annotations

from typing import Any

from eth_utils import to_checksum_address

from ..abi import STAKING_ELIGIBILITY
from ..codec import AbiField, ParameterSchema
from ..types import (
    BeginUnstakeResult,
    CooldownInfo,
    CreateInstanceResult,
    ModuleInfo,
    StakeInfo,
    TransactionResult,
    WearerStatus,
)
from .base import ModuleClient, ModuleDescriptor

StakingEligibilityInfo = ModuleDescriptor(
    key="staking",
    info=ModuleInfo(
        name="Staking Eligibility",
        description=(
            "Requires wearers of a given Hat to stake a minimum amount of a specified token in order to be "
            "eligible, and enables others in the hat tree's organization to slash the stake of a wearer who "
            "is behaving badly."
        ),
        github_repo_owner="Hats-Protocol",
        github_repo_name="staking-eligibility",
    ),
    abi_name=STAKING_ELIGIBILITY,
    parameters=ParameterSchema(
        init_fields=(
            AbiField("min_stake", "uint248"),
            AbiField("judge_hat", "uint256"),
            AbiField("recipient_hat", "uint256"),
            AbiField("cooldown_period", "uint256"),
        ),
        immutable_fields=(AbiField("token", "address"),),
    ),
)


class StakingEligibilityClient(ModuleClient):
    """Deploy and operate Staking Eligibility instances."""

    descriptor = StakingEligibilityInfo
    parameter_readers = {
        "token": "get_token",
        "min_stake": "get_min_stake",
        "judge_hat": "get_judge_hat",
        "recipient_hat": "get_recipient_hat",
        "cooldown_period": "get_cooldown_period",
        "total_slashed_stakes": "get_total_slashed_stakes",
    }

    def create_instance(
        self,
        *,
        account: Any,
        hat_id: int,
        min_stake: int,
        judge_hat: int,
        recipient_hat: int,
        cooldown_period: int,
        token: str,
    ) -> CreateInstanceResult:
        return self._deploy(
            account,
            hat_id,
            {
                "min_stake": min_stake,
                "judge_hat": judge_hat,
                "recipient_hat": recipient_hat,
                "cooldown_period": cooldown_period,
                "token": token,
            },
        )

    # Writes ----------------------------------------------------------------
    def stake(self, *, account: Any, instance: str, amount: int) -> TransactionResult:
        """Stake ``amount`` tokens; the instance must already hold an allowance."""

        return self._transact(account, instance, "stake", amount)

    def begin_unstake(self, *, account: Any, instance: str, amount: int) -> BeginUnstakeResult:
        """Start the cooldown for ``amount``; the result carries the cooldown end timestamp."""

        self._require_write()
        result, cooldown_end = self._execute(
            account,
            instance,
            "beginUnstake",
            amount,
            decode=self._event_decoder("StakingEligibility_UnstakeBegun", "cooldownEnd", emitter=instance),
        )
        return BeginUnstakeResult(
            status=result.status,
            transaction_hash=result.transaction_hash,
            cooldown_end=int(cooldown_end),
        )

    def complete_unstake(self, *, account: Any, instance: str, staker: str) -> TransactionResult:
        return self._transact(account, instance, "completeUnstake", to_checksum_address(staker))

    def slash(self, *, account: Any, instance: str, staker: str) -> TransactionResult:
        return self._transact(account, instance, "slash", to_checksum_address(staker))

    def forgive(self, *, account: Any, instance: str, staker: str) -> TransactionResult:
        return self._transact(account, instance, "forgive", to_checksum_address(staker))

    def withdraw(self, *, account: Any, instance: str, recipient: str) -> TransactionResult:
        """Send the slashed stakes held by the instance to ``recipient``."""

        return self._transact(account, instance, "withdraw", to_checksum_address(recipient))

    def change_min_stake(self, *, account: Any, instance: str, min_stake: int) -> TransactionResult:
        return self._transact(account, instance, "changeMinStake", min_stake)

    def change_judge_hat(self, *, account: Any, instance: str, judge_hat: int) -> TransactionResult:
        return self._transact(account, instance, "changeJudgeHat", judge_hat)

    def change_recipient_hat(self, *, account: Any, instance: str, recipient_hat: int) -> TransactionResult:
        return self._transact(account, instance, "changeRecipientHat", recipient_hat)

    def change_cooldown_period(self, *, account: Any, instance: str, cooldown_period: int) -> TransactionResult:
        return self._transact(account, instance, "changeCooldownPeriod", cooldown_period)

    # Reads -----------------------------------------------------------------
    def get_token(self, instance: str) -> str:
        return self._call(instance, "TOKEN")

    def get_min_stake(self, instance: str) -> int:
        return int(self._call(instance, "minStake"))

    def get_judge_hat(self, instance: str) -> int:
        return int(self._call(instance, "judgeHat"))

    def get_recipient_hat(self, instance: str) -> int:
        return int(self._call(instance, "recipientHat"))

    def get_cooldown_period(self, instance: str) -> int:
        return int(self._call(instance, "cooldownPeriod"))

    def get_total_slashed_stakes(self, instance: str) -> int:
        return int(self._call(instance, "totalSlashedStakes"))

    def get_stake(self, *, instance: str, staker: str) -> StakeInfo:
        amount, slashed = self._call(instance, "stakes", to_checksum_address(staker))
        return StakeInfo(stake=int(amount), is_slashed=bool(slashed))

    def get_cooldown(self, *, instance: str, staker: str) -> CooldownInfo:
        amount, ends_at = self._call(instance, "cooldowns", to_checksum_address(staker))
        return CooldownInfo(amount=int(amount), ends_at=int(ends_at))

    def get_wearer_status(self, *, instance: str, wearer: str) -> WearerStatus:
        eligible, standing = self._call(instance, "getWearerStatus", to_checksum_address(wearer), 0)
        return WearerStatus(eligible=bool(eligible), standing=bool(standing))


__all__ = ["StakingEligibilityClient", "StakingEligibilityInfo"]
