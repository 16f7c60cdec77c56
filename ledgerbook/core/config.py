"""
Reconciliation Configuration

Settings the engine needs but should not hard-code:
- Which ledger account is the bank-reconciled cash account
- Which accounts adjustment entries post to
- The auto-match confidence threshold
- The tolerance used for every monetary equality test

Defaults mirror the demo chart of accounts. Each value can be overridden
through an environment variable.
"""

import logging
import os
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from ledgerbook.services.errors import ConfigError

logger = logging.getLogger(__name__)

CASH_ACCOUNT = "1011 - Cash"
BANK_FEE_ACCOUNT = "6920 - Bank Fees"
INTEREST_INCOME_ACCOUNT = "4030 - Interest Income"
NSF_RECEIVABLE_ACCOUNT = "1020 - Accounts Receivable"

# Every monetary equality test in the engine uses this tolerance
EPSILON = 0.01


@dataclass(frozen=True)
class ReconciliationSettings:
    """
    Accounts and thresholds used by the reconciliation engine.

    - cash_account: only journal lines posted here take part in reconciliation
    - bank_fee_account: expense debited when a bank fee is recorded
    - interest_income_account: income credited when bank interest is recorded
    - nsf_receivable_account: receivable reinstated when a deposit bounces
    - auto_match_threshold: minimum confidence (0-100) for an automatic match
    - epsilon: amount tolerance for equality checks
    """
    cash_account: str = CASH_ACCOUNT
    bank_fee_account: str = BANK_FEE_ACCOUNT
    interest_income_account: str = INTEREST_INCOME_ACCOUNT
    nsf_receivable_account: str = NSF_RECEIVABLE_ACCOUNT
    auto_match_threshold: float = 80.0
    epsilon: float = EPSILON

    def __post_init__(self):
        if not 0 < self.auto_match_threshold <= 100:
            raise ConfigError("auto_match_threshold", "Must be within (0, 100]")
        if self.epsilon <= 0:
            raise ConfigError("epsilon", "Must be greater than zero")
        for name in ("cash_account", "bank_fee_account", "interest_income_account", "nsf_receivable_account"):
            if not getattr(self, name).strip():
                raise ConfigError(name, "Account label cannot be empty")

    @classmethod
    def from_env(cls) -> "ReconciliationSettings":
        """Build settings from LEDGERBOOK_* environment variables."""
        threshold = os.getenv("LEDGERBOOK_AUTO_MATCH_THRESHOLD", "80")
        epsilon = os.getenv("LEDGERBOOK_AMOUNT_EPSILON", str(EPSILON))
        try:
            threshold_value = float(threshold)
            epsilon_value = float(epsilon)
        except ValueError as exc:
            raise ConfigError("LEDGERBOOK_AUTO_MATCH_THRESHOLD/LEDGERBOOK_AMOUNT_EPSILON", str(exc)) from exc

        return cls(
            cash_account=os.getenv("LEDGERBOOK_CASH_ACCOUNT", CASH_ACCOUNT),
            bank_fee_account=os.getenv("LEDGERBOOK_BANK_FEE_ACCOUNT", BANK_FEE_ACCOUNT),
            interest_income_account=os.getenv("LEDGERBOOK_INTEREST_INCOME_ACCOUNT", INTEREST_INCOME_ACCOUNT),
            nsf_receivable_account=os.getenv("LEDGERBOOK_NSF_RECEIVABLE_ACCOUNT", NSF_RECEIVABLE_ACCOUNT),
            auto_match_threshold=threshold_value,
            epsilon=epsilon_value,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


_settings: Optional[ReconciliationSettings] = None


def get_settings() -> ReconciliationSettings:
    """Get the process-wide settings, loading them from the environment once."""
    global _settings
    if _settings is None:
        _settings = ReconciliationSettings.from_env()
        logger.info(f"Loaded reconciliation settings (cash account: {_settings.cash_account})")
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
