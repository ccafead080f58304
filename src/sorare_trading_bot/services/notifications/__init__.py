"""Event-to-notification bridges."""

from sorare_trading_bot.services.notifications.trade_activity_notifier import TradeActivityNotifier

__all__ = ["TradeActivityNotifier"]
