"""Poll cycle engine."""

from tradebell.services.polling.account_poller import AccountPoller
from tradebell.services.polling.cycle import CycleOutcome, CycleStatus, PollState
from tradebell.services.polling.polling_runner import PollingRunner

__all__ = [
    "AccountPoller",
    "CycleOutcome",
    "CycleStatus",
    "PollState",
    "PollingRunner",
]
