"""
Data models for the yield-farming SDK.
"""
from typing import Dict, Any, Optional, List
from pydantic import BaseModel, Field

class TxReceipt(BaseModel):
    """Transaction receipt from the blockchain"""
    tx_hash: str = Field(..., alias="transactionHash")
    block_number: int = Field(..., alias="blockNumber")
    block_hash: str = Field(..., alias="blockHash")
    status: int
    gas_used: int = Field(..., alias="gasUsed")
    from_address: str = Field(..., alias="from")
    to_address: Optional[str] = Field(None, alias="to")
    logs: List[Dict[str, Any]] = Field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.status == 1

    class Config:
        populate_by_name = True


class PoolInfo(BaseModel):
    """Pool-wide figures read at a single block"""
    total_value_locked: int
    current_apy: int
    block_number: int


class UserPosition(BaseModel):
    """One account's stake and rewards read at a single block"""
    account: str
    staked_balance: int
    pending_rewards: int
    block_number: int


class NotYetMined:
    """
    Result of a receipt lookup for a transaction that has no receipt yet.

    This is a normal outcome, not an error. Use the ``NOT_YET_MINED``
    singleton and compare with ``is``.
    """
    _instance: Optional["NotYetMined"] = None

    def __new__(cls) -> "NotYetMined":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_YET_MINED"


NOT_YET_MINED = NotYetMined()
