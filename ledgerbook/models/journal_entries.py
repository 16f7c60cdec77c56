"""Journal and opening-balance entry models."""
import datetime

from pydantic import Field, field_validator

from ledgerbook.models.base import LBBaseModel


class JournalEntry(LBBaseModel):
    """
    A single journal line posted to one account.

    Exactly one of debit/credit is expected to be nonzero; that rule is
    enforced by ``services.validation`` at entry time, not here.
    """

    id: str = Field(..., min_length=1)
    date: datetime.date
    account: str
    description: str = ""
    debit: float = Field(default=0.0, ge=0)
    credit: float = Field(default=0.0, ge=0)
    reference: str = ""

    @field_validator("id")
    @classmethod
    def normalize_id(cls, value: str) -> str:
        return value.strip()

    @property
    def account_code(self) -> str:
        """Leading code of an account label such as ``1011 - Cash``."""
        return self.account.split(" - ")[0].strip()


class OpeningBalanceEntry(LBBaseModel):
    id: str = Field(..., min_length=1)
    account: str
    debit: float = Field(default=0.0, ge=0)
    credit: float = Field(default=0.0, ge=0)
    date: datetime.date

    @property
    def account_code(self) -> str:
        return self.account.split(" - ")[0].strip()
