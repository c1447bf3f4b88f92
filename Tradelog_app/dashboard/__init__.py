from .client import TradeApiClient, TokenStore, ApiError, SessionExpired
from .notifications import Notifier, Notification
from .state import TradeDashboard, DashboardViewState, DashboardView, TradeRow, TradeFormInput
from .summary import SummaryStats, compute_summary

__all__ = [
    'TradeApiClient', 'TokenStore', 'ApiError', 'SessionExpired',
    'Notifier', 'Notification',
    'TradeDashboard', 'DashboardViewState', 'DashboardView', 'TradeRow', 'TradeFormInput',
    'SummaryStats', 'compute_summary',
]
