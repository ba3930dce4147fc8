"""Jokerace Eligibility module client."""

from __future__ import annotations

from typing import Any, Optional

from eth_utils import to_checksum_address

from ..abi import JOKERACE_ELIGIBILITY
from ..codec import AbiField, ParameterSchema
from ..types import CreateInstanceResult, ModuleInfo, TransactionResult, WearerStatus
from .base import ModuleClient, ModuleDescriptor

JokeraceEligibilityInfo = ModuleDescriptor(
    key="jokerace",
    info=ModuleInfo(
        name="Jokerace Eligibility",
        description="Defines eligibility for wearers according to a Jokerace contest results",
        github_repo_owner="Hats-Protocol",
        github_repo_name="jokerace-eligibility",
    ),
    abi_name=JOKERACE_ELIGIBILITY,
    parameters=ParameterSchema(
        init_fields=(
            AbiField("contest", "address"),
            AbiField("term_end", "uint256"),
            AbiField("top_k", "uint256"),
        ),
        # zero means the admins of the module's hat act as admins
        immutable_fields=(AbiField("admin_hat", "uint256", default=0),),
    ),
)


class JokeraceEligibilityClient(ModuleClient):
    """Deploy and operate Jokerace Eligibility instances."""

    descriptor = JokeraceEligibilityInfo
    parameter_readers = {
        "admin_hat": "get_admin_hat",
        "contest": "get_contest",
        "term_end": "get_term_end",
        "top_k": "get_top_k",
        "reelection_allowed": "is_reelection_allowed",
    }

    def create_instance(
        self,
        *,
        account: Any,
        hat_id: int,
        contest: str,
        term_end: int,
        top_k: int,
        admin_hat: Optional[int] = None,
    ) -> CreateInstanceResult:
        return self._deploy(
            account,
            hat_id,
            {"contest": contest, "term_end": term_end, "top_k": top_k, "admin_hat": admin_hat},
        )

    # Writes ----------------------------------------------------------------
    def pull_election_results(self, *, account: Any, instance: str) -> TransactionResult:
        """Mark the top K of the finished contest as eligible for the current term."""

        return self._transact(account, instance, "pullElectionResults")

    def reelection(
        self,
        *,
        account: Any,
        instance: str,
        new_contest: str,
        new_term_end: int,
        new_top_k: int,
    ) -> TransactionResult:
        """Start a new term backed by another contest; only allowed once the current term ended."""

        return self._transact(
            account, instance, "reelection", to_checksum_address(new_contest), new_term_end, new_top_k
        )

    # Reads -----------------------------------------------------------------
    def get_admin_hat(self, instance: str) -> int:
        return int(self._call(instance, "ADMIN_HAT"))

    def get_contest(self, instance: str) -> str:
        return self._call(instance, "underlyingContest")

    def get_term_end(self, instance: str) -> int:
        return int(self._call(instance, "termEnd"))

    def get_top_k(self, instance: str) -> int:
        return int(self._call(instance, "topK"))

    def get_eligibility_per_contest(self, *, instance: str, wearer: str, contest: str) -> bool:
        return bool(
            self._call(
                instance,
                "eligibleWearersPerContest",
                to_checksum_address(wearer),
                to_checksum_address(contest),
            )
        )

    def get_wearer_status(self, *, instance: str, wearer: str) -> WearerStatus:
        eligible, standing = self._call(instance, "getWearerStatus", to_checksum_address(wearer), 0)
        return WearerStatus(eligible=bool(eligible), standing=bool(standing))

    def is_reelection_allowed(self, instance: str) -> bool:
        return bool(self._call(instance, "reelectionAllowed"))


__all__ = ["JokeraceEligibilityClient", "JokeraceEligibilityInfo"]
