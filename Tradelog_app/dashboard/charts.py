# Tradelog_app/dashboard/charts.py
"""
Plotly projections of the filtered trades.

``ChartSet`` owns the four figures. Every data change builds a complete new
set and swaps it in; no figure is patched in place.
"""

from itertools import accumulate
from pathlib import Path

import plotly.graph_objects as go

PROFIT_COLOR = 'rgba(40,167,69,0.8)'
LOSS_COLOR = 'rgba(220,53,69,0.8)'
PROFIT_BORDER = '#28a745'
LOSS_BORDER = '#dc3545'
CUMULATIVE_COLOR = '#667eea'
TIME_SERIES_COLOR = '#764ba2'


def format_date(day):
    return f"{day.strftime('%b')} {day.day}, {day.year}"


def trade_label(trade):
    return f"{trade.symbol} ({format_date(trade.trade_date)})"


def _money_axis(fig, labels=None):
    fig.update_yaxes(tickprefix='$', tickformat=',.0f', zeroline=True)
    if labels is not None:
        fig.update_xaxes(
            tickmode='array',
            tickvals=list(range(len(labels))),
            ticktext=labels,
            tickangle=-45,
        )
    else:
        fig.update_xaxes(tickangle=-45)
    fig.update_layout(margin=dict(l=40, r=20, t=50, b=80))
    return fig


def build_pl_bar(trades):
    # positions on x so trades sharing symbol and date keep separate bars
    labels = [trade_label(t) for t in trades]
    values = [t.pl for t in trades]
    fig = go.Figure(go.Bar(
        x=list(range(len(trades))),
        y=values,
        hovertext=labels,
        hovertemplate='%{hovertext}<br>P/L: $%{y:.2f}<extra></extra>',
        marker=dict(
            color=[PROFIT_COLOR if v >= 0 else LOSS_COLOR for v in values],
            line=dict(color=[PROFIT_BORDER if v >= 0 else LOSS_BORDER for v in values], width=2),
        ),
        name='Profit/Loss',
    ))
    fig.update_layout(title='Individual Trade P/L', showlegend=False)
    return _money_axis(fig, labels)


def build_cumulative_line(trades):
    labels = [trade_label(t) for t in trades]
    running = list(accumulate(t.pl for t in trades))
    fig = go.Figure(go.Scatter(
        x=list(range(len(trades))),
        y=running,
        mode='lines+markers',
        fill='tozeroy',
        line=dict(color=CUMULATIVE_COLOR, width=3, shape='spline'),
        marker=dict(size=8, color=CUMULATIVE_COLOR, line=dict(color='#fff', width=2)),
        hovertext=labels,
        hovertemplate='%{hovertext}<br>Cumulative P/L: $%{y:.2f}<extra></extra>',
        name='Cumulative P/L',
    ))
    fig.update_layout(title='Cumulative P/L')
    return _money_axis(fig, labels)


def profit_loss_totals(trades):
    profits = sum(t.pl for t in trades if t.pl > 0)
    losses = abs(sum(t.pl for t in trades if t.pl < 0))
    return profits, losses


def build_profit_loss_pie(trades):
    profits, losses = profit_loss_totals(trades)
    fig = go.Figure(go.Pie(
        labels=['Profits', 'Losses'],
        values=[profits, losses],
        hole=0.5,
        sort=False,
        marker=dict(colors=[PROFIT_COLOR, LOSS_COLOR], line=dict(color=[PROFIT_BORDER, LOSS_BORDER], width=2)),
        hovertemplate='%{label}: $%{value:.2f} (%{percent})<extra></extra>',
    ))
    fig.update_layout(title='Profit vs Loss')
    return fig


def build_time_series(trades):
    ordered = sorted(trades, key=lambda t: t.trade_date)
    values = [t.pl for t in ordered]
    fig = go.Figure(go.Scatter(
        x=[t.trade_date for t in ordered],
        y=values,
        mode='lines+markers',
        fill='tozeroy',
        line=dict(color=TIME_SERIES_COLOR, width=3, shape='spline'),
        marker=dict(
            size=10,
            color=[PROFIT_BORDER if v >= 0 else LOSS_BORDER for v in values],
            line=dict(color='#fff', width=2),
        ),
        hovertemplate='%{x|%b %d, %Y}<br>P/L: $%{y:.2f}<extra></extra>',
        name='P/L Over Time',
    ))
    fig.update_layout(title='P/L Over Time')
    return _money_axis(fig)


CHART_BUILDERS = {
    'pl': build_pl_bar,
    'cumulative': build_cumulative_line,
    'pie': build_profit_loss_pie,
    'time_series': build_time_series,
}


class ChartSet:
    def __init__(self):
        self._figures = {}
        self.generation = 0

    def rebuild(self, trades):
        """Replace every chart for ``trades``; an empty set leaves no charts"""
        if not trades:
            self.dispose()
            return self
        fresh = {name: builder(trades) for name, builder in CHART_BUILDERS.items()}
        self.dispose()
        self._figures = fresh
        self.generation += 1
        return self

    def dispose(self):
        self._figures = {}

    def __getitem__(self, name):
        return self._figures[name]

    def __contains__(self, name):
        return name in self._figures

    def __len__(self):
        return len(self._figures)

    def items(self):
        return self._figures.items()

    def write_html(self, directory):
        """Write each chart to ``<directory>/<name>.html``; returns the paths"""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        paths = []
        for name, fig in self._figures.items():
            path = directory / f"{name}.html"
            fig.write_html(str(path), include_plotlyjs='cdn')
            paths.append(path)
        return paths
