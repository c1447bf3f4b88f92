# Tradelog_app/dashboard/state.py
"""
Dashboard view state and controller.

All state lives in one immutable ``DashboardViewState`` that is replaced
wholesale on load, filter and page changes. Mutations always go through the
API and are followed by a full reload, so the view only ever shows
server-confirmed data.
"""

import logging
import math
import os
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from pathlib import Path
from typing import Optional, Tuple

from .charts import ChartSet
from .client import ApiError, SessionExpired
from .export import csv_filename, render_trades_report, trades_to_csv
from .notifications import Notifier
from .summary import SummaryStats, compute_summary

logger = logging.getLogger(__name__)

PAGE_SIZE = int(os.environ.get('TRADELOG_PAGE_SIZE', 20))
RANGE_ALL = 'all'


def _parse_day(value):
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value).split('T')[0])


@dataclass(frozen=True)
class TradeRow:
    id: int
    trade_date: date
    symbol: str
    strike_price: float
    option_type: str
    quantity: int
    buy_price: float
    sell_price: float
    pl: float
    return_pct: float

    @classmethod
    def from_api(cls, data):
        return cls(
            id=int(data['id']),
            trade_date=_parse_day(data['trade_date']),
            symbol=data['symbol'],
            strike_price=float(data['strike_price']),
            option_type=data['option_type'],
            quantity=int(data['quantity']),
            buy_price=float(data['buy_price']),
            sell_price=float(data['sell_price']),
            pl=float(data['pl']),
            return_pct=float(data['return_pct']),
        )


@dataclass(frozen=True)
class TradeFormInput:
    """The add/edit form. ``trade_id`` set means edit mode."""
    date: Optional[date] = None
    symbol: str = ''
    strike_price: Optional[float] = None
    option_type: str = 'Call'
    quantity: Optional[int] = None
    buy_price: Optional[float] = None
    sell_price: Optional[float] = None
    trade_id: Optional[int] = None

    @classmethod
    def from_trade(cls, trade):
        return cls(
            date=trade.trade_date,
            symbol=trade.symbol,
            strike_price=trade.strike_price,
            option_type=trade.option_type,
            quantity=trade.quantity,
            buy_price=trade.buy_price,
            sell_price=trade.sell_price,
            trade_id=trade.id,
        )

    def to_payload(self):
        """API body with client-computed pl and returnPct"""
        pl = (self.sell_price - self.buy_price) * self.quantity
        return_pct = (self.sell_price - self.buy_price) / self.buy_price * 100
        return {
            'date': self.date.isoformat(),
            'symbol': self.symbol.strip().upper(),
            'strikePrice': self.strike_price,
            'optionType': self.option_type,
            'quantity': self.quantity,
            'buyPrice': self.buy_price,
            'sellPrice': self.sell_price,
            'pl': pl,
            'returnPct': return_pct,
        }


@dataclass(frozen=True)
class DashboardViewState:
    all_trades: Tuple[TradeRow, ...] = ()
    filtered_trades: Tuple[TradeRow, ...] = ()
    page: int = 1
    page_size: int = PAGE_SIZE
    active_range: object = RANGE_ALL

    @property
    def total_pages(self):
        return math.ceil(len(self.filtered_trades) / self.page_size)

    @property
    def page_rows(self):
        start = (self.page - 1) * self.page_size
        return self.filtered_trades[start:start + self.page_size]

    @property
    def page_info(self):
        if not self.filtered_trades:
            return "No trades"
        return f"Page {self.page} of {self.total_pages} ({len(self.filtered_trades)} trades)"


@dataclass(frozen=True)
class DashboardView:
    rows: Tuple[TradeRow, ...]
    page_info: str
    summary: SummaryStats
    charts: ChartSet = field(compare=False)


class TradeDashboard:
    def __init__(self, client, notifier=None, page_size=PAGE_SIZE, today=date.today, confirm=None):
        self.client = client
        self.notifier = notifier or Notifier()
        self.today = today
        self.confirm = confirm or (lambda message: True)
        self.state = DashboardViewState(page_size=page_size)
        self.charts = ChartSet()
        self.form = TradeFormInput()
        self.view = None
        # (action, trade id) -> handler; rendering never wires callbacks itself
        self._actions = {
            'edit': self.edit_trade,
            'delete': self.delete_trade,
        }

    # ---------- Load ----------
    def load(self):
        """Fetch every trade of the logged-in user and reset filter and paging"""
        try:
            trades = tuple(TradeRow.from_api(t) for t in self.client.list_trades())
        except SessionExpired as e:
            self.notifier.error(e.message)
            raise
        except ApiError as e:
            logger.error(f"Error loading trades: {e}")
            self.notifier.error("Error loading trades. Please try again.")
            return self.render()

        self.state = DashboardViewState(
            all_trades=trades,
            filtered_trades=trades,
            page=1,
            page_size=self.state.page_size,
            active_range=RANGE_ALL,
        )
        return self.render()

    # ---------- Filters ----------
    def filter_range(self, days):
        """Keep trades dated within the last ``days`` days, or all of them"""
        if days == RANGE_ALL:
            filtered = self.state.all_trades
        else:
            try:
                days = int(days)
            except (TypeError, ValueError):
                days = 0
            if days < 1:
                self.notifier.warning("Range must be a number of days or 'all'")
                return self.view
            end = self.today()
            start = end - timedelta(days=days)
            filtered = tuple(t for t in self.state.all_trades if start <= t.trade_date <= end)

        self.state = replace(self.state, filtered_trades=filtered, page=1, active_range=days)
        self.notifier.info(f"Filtered to {len(filtered)} trades")
        return self.render()

    def apply_custom_range(self, start, end):
        if not start or not end:
            self.notifier.warning("Please select both from and to dates")
            return self.view
        start, end = _parse_day(start), _parse_day(end)
        if start > end:
            self.notifier.warning("From date cannot be after to date")
            return self.view

        filtered = tuple(t for t in self.state.all_trades if start <= t.trade_date <= end)
        self.state = replace(self.state, filtered_trades=filtered, page=1, active_range=(start, end))
        self.notifier.info(f"Custom range applied: {len(filtered)} trades")
        return self.render()

    # ---------- Pagination ----------
    def go_to_page(self, page):
        """Out-of-range pages are ignored"""
        if 1 <= page <= self.state.total_pages and page != self.state.page:
            self.state = replace(self.state, page=page)
            return self.render()
        return self.view

    def next_page(self):
        return self.go_to_page(self.state.page + 1)

    def prev_page(self):
        return self.go_to_page(self.state.page - 1)

    # ---------- Render ----------
    def render(self):
        trades = self.state.filtered_trades
        self.charts.rebuild(trades)
        self.view = DashboardView(
            rows=self.state.page_rows,
            page_info=self.state.page_info,
            summary=compute_summary(trades),
            charts=self.charts,
        )
        return self.view

    # ---------- Mutations ----------
    def dispatch(self, action, trade_id):
        handler = self._actions.get(action)
        if handler is None:
            raise KeyError(f"Unknown trade action: {action}")
        return handler(trade_id)

    def _find(self, trade_id):
        return next((t for t in self.state.all_trades if t.id == trade_id), None)

    def _form_problem(self, form):
        required = (form.date, form.symbol and form.symbol.strip(), form.strike_price,
                    form.option_type, form.quantity, form.buy_price, form.sell_price)
        if any(not value for value in required):
            return "Please fill in all fields"
        if form.quantity <= 0:
            return "Quantity must be greater than 0"
        if form.buy_price <= 0 or form.sell_price <= 0:
            return "Prices must be greater than 0"
        return None

    def save_trade(self, form=None):
        """Create, or update when the form carries a trade id; then reload"""
        form = form or self.form
        problem = self._form_problem(form)
        if problem:
            self.notifier.warning(problem)
            return False

        payload = form.to_payload()
        try:
            if form.trade_id:
                self.client.update_trade(form.trade_id, payload)
                self.notifier.success("Trade updated successfully!")
            else:
                self.client.create_trade(payload)
                self.notifier.success("Trade added successfully!")
        except ApiError as e:
            logger.error(f"Error saving trade: {e}")
            self.notifier.error(f"Error saving trade: {e.message}")
            return False

        self.load()
        self.reset_form()
        return True

    def edit_trade(self, trade_id):
        trade = self._find(trade_id)
        if trade is None:
            return None
        self.form = TradeFormInput.from_trade(trade)
        self.notifier.info("Trade loaded for editing")
        return self.form

    def delete_trade(self, trade_id):
        if not self.confirm("Are you sure you want to delete this trade? This action cannot be undone."):
            return False
        try:
            self.client.delete_trade(trade_id)
        except ApiError as e:
            logger.error(f"Error deleting trade: {e}")
            self.notifier.error(f"Error deleting trade: {e.message}")
            return False
        self.notifier.success("Trade deleted successfully")
        self.load()
        return True

    def reset_form(self):
        self.form = TradeFormInput(date=self.today())

    # ---------- Export ----------
    def export_csv(self, directory='.'):
        """Write the filtered trades to ``trade_log_<today>.csv``; None when empty"""
        trades = self.state.filtered_trades
        if not trades:
            self.notifier.warning("No trades to export!")
            return None
        path = Path(directory) / csv_filename(self.today())
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(trades_to_csv(trades), encoding='utf-8')
        self.notifier.success("CSV exported successfully!")
        return path

    def open_report(self):
        trades = self.state.filtered_trades
        if not trades:
            self.notifier.warning("No trades to display!")
            return None
        html = render_trades_report(trades, generated_on=self.today())
        self.notifier.info("All trades report generated")
        return html

    def logout(self):
        self.client.logout()
        self.state = DashboardViewState(page_size=self.state.page_size)
        self.charts.dispose()
        self.view = None
        self.notifier.success("Logged out successfully")
