from typing import Optional, List, Iterable
from uuid import UUID
from datetime import date
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from uuid6 import uuid7


class AccountType(str, Enum):
    RETIREMENT_401K = "401k"
    TRADITIONAL_IRA = "traditional-ira"
    ROTH_IRA = "roth-ira"
    BROKERAGE = "brokerage"
    SAVINGS = "savings"
    CHECKING = "checking"


class AccountStatus(str, Enum):
    ACTIVE = "active"
    CLOSED = "closed"


# Projection order; every per-type loop walks this list
ACCOUNT_TYPES: List[AccountType] = list(AccountType)


class Account(BaseModel):
    id: UUID = Field(default_factory=uuid7)
    accountType: AccountType
    accountName: str = ""
    institution: Optional[str] = None
    balance: float = Field(default=0.0, ge=0)
    asOfDate: Optional[date] = None # When this balance was recorded
    status: AccountStatus = AccountStatus.ACTIVE
    notes: Optional[str] = None


# Field name for each account type. JSON keys are the account type values.
_FIELD_BY_TYPE = {
    AccountType.RETIREMENT_401K: "retirement401k",
    AccountType.TRADITIONAL_IRA: "traditionalIra",
    AccountType.ROTH_IRA: "rothIra",
    AccountType.BROKERAGE: "brokerage",
    AccountType.SAVINGS: "savings",
    AccountType.CHECKING: "checking",
}


class AccountTypeAmounts(BaseModel):
    """
    One amount per account type. Used for contribution assumptions and for
    the running balances of a projection. All six types are always present.
    """
    model_config = ConfigDict(populate_by_name=True)

    retirement401k: float = Field(default=0.0, alias="401k")
    traditionalIra: float = Field(default=0.0, alias="traditional-ira")
    rothIra: float = Field(default=0.0, alias="roth-ira")
    brokerage: float = Field(default=0.0, alias="brokerage")
    savings: float = Field(default=0.0, alias="savings")
    checking: float = Field(default=0.0, alias="checking")

    def get(self, account_type: AccountType) -> float:
        return getattr(self, _FIELD_BY_TYPE[AccountType(account_type)])

    def set(self, account_type: AccountType, value: float) -> None:
        setattr(self, _FIELD_BY_TYPE[AccountType(account_type)], value)

    def add(self, account_type: AccountType, amount: float) -> None:
        self.set(account_type, self.get(account_type) + amount)

    @property
    def total(self) -> float:
        return sum(self.get(t) for t in ACCOUNT_TYPES)

    @classmethod
    def from_accounts(cls, accounts: Iterable[Account]) -> "AccountTypeAmounts":
        """Aggregates active account balances by type. Closed accounts are ignored."""
        amounts = cls()
        for account in accounts:
            if account.status == AccountStatus.ACTIVE:
                amounts.add(account.accountType, account.balance)
        return amounts
