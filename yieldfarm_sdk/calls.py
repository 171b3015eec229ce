"""
Typed descriptions of the pool contract calls the client can make.

Each supported contract function is a member of ``FarmFunction`` and each call
is built through one of the ``ContractCall`` constructors, so arguments are
checked here rather than left to free-form by-name dispatch.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Tuple

from .utils import normalize_address, require_amount


class FarmFunction(str, Enum):
    """Functions of the yield pool contract, by their ABI name."""
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    CLAIM_REWARDS = "claimRewards"
    BALANCE_OF = "balanceOf"
    PENDING_REWARDS = "pendingRewards"
    TOTAL_VALUE_LOCKED = "totalValueLocked"
    GET_CURRENT_APY = "getCurrentAPY"

    @property
    def mutating(self) -> bool:
        """Whether calling this function requires a transaction."""
        return self in _MUTATING


_MUTATING = frozenset({FarmFunction.DEPOSIT, FarmFunction.WITHDRAW, FarmFunction.CLAIM_REWARDS})


@dataclass(frozen=True)
class ContractCall:
    """A single pool function together with its already-validated arguments."""
    function: FarmFunction
    args: Tuple[Any, ...] = ()

    @property
    def mutating(self) -> bool:
        return self.function.mutating

    @classmethod
    def deposit(cls, amount: int) -> "ContractCall":
        return cls(FarmFunction.DEPOSIT, (require_amount(amount),))

    @classmethod
    def withdraw(cls, amount: int) -> "ContractCall":
        return cls(FarmFunction.WITHDRAW, (require_amount(amount),))

    @classmethod
    def claim_rewards(cls) -> "ContractCall":
        return cls(FarmFunction.CLAIM_REWARDS)

    @classmethod
    def balance_of(cls, account: str) -> "ContractCall":
        return cls(FarmFunction.BALANCE_OF, (normalize_address(account),))

    @classmethod
    def pending_rewards(cls, account: str) -> "ContractCall":
        return cls(FarmFunction.PENDING_REWARDS, (normalize_address(account),))

    @classmethod
    def total_value_locked(cls) -> "ContractCall":
        return cls(FarmFunction.TOTAL_VALUE_LOCKED)

    @classmethod
    def current_apy(cls) -> "ContractCall":
        return cls(FarmFunction.GET_CURRENT_APY)
