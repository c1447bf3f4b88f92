# Tradelog_app/dashboard/export.py

from datetime import date

import pandas as pd
from jinja2 import Environment, PackageLoader, select_autoescape

from .charts import format_date
from .summary import compute_summary, format_signed_money, format_signed_pct

CSV_COLUMNS = [
    ('Date', 'trade_date'),
    ('Symbol', 'symbol'),
    ('Strike Price', 'strike_price'),
    ('Option Type', 'option_type'),
    ('Quantity', 'quantity'),
    ('Buy Price', 'buy_price'),
    ('Sell Price', 'sell_price'),
    ('P/L', 'pl'),
    ('Return %', 'return_pct'),
]

_templates = Environment(
    loader=PackageLoader('Tradelog_app', 'templates'),
    autoescape=select_autoescape(['html']),
)
_templates.filters['display_date'] = format_date
_templates.filters['signed_money'] = format_signed_money
_templates.filters['signed_pct'] = format_signed_pct


def csv_filename(day=None):
    return f"trade_log_{(day or date.today()).isoformat()}.csv"


def trades_to_csv(trades):
    """Trade rows followed by a SUMMARY block; values are written as held"""
    rows = pd.DataFrame(
        [[getattr(t, attr) for _, attr in CSV_COLUMNS] for t in trades],
        columns=[header for header, _ in CSV_COLUMNS],
    )
    rows['Date'] = rows['Date'].map(lambda d: d.isoformat())

    stats = compute_summary(trades)
    summary = pd.DataFrame([
        ['Total Trades', stats.total_trades],
        ['Win Rate', f"{stats.win_rate:.2f}%"],
        ['Total P/L', f"{stats.total_pl:.2f}"],
    ])

    body = rows.to_csv(index=False, lineterminator='\n')
    tail = summary.to_csv(index=False, header=False, lineterminator='\n')
    return f"{body}\nSUMMARY\n{tail}"


def render_trades_report(trades, generated_on=None):
    """Printable 'All Trades Report' HTML page"""
    stats = compute_summary(trades)
    template = _templates.get_template('trades_report.html')
    return template.render(
        trades=trades,
        stats=stats,
        generated_on=format_date(generated_on or date.today()),
    )
