"""Trade state tracking."""

from tradebell.services.trade_state.trade_state_tracker import TradeStateTracker

__all__ = ["TradeStateTracker"]
