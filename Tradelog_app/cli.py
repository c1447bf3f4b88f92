# Tradelog_app/cli.py
"""
Terminal dashboard: ``tradelog --help``
"""

import sys
from datetime import date
from pathlib import Path

import click

from .dashboard.client import TradeApiClient, SessionExpired, ApiError
from .dashboard.notifications import Notifier
from .dashboard.state import TradeDashboard, TradeFormInput, PAGE_SIZE
from .dashboard.summary import format_summary, format_signed_money, format_signed_pct
from .dashboard.charts import format_date

_STYLES = {
    'success': dict(fg='green'),
    'error': dict(fg='red'),
    'warning': dict(fg='yellow'),
    'info': dict(fg='cyan'),
}


def _echo_notification(notification):
    click.secho(notification.message, err=notification.level == 'error', **_STYLES[notification.level])


def _dashboard(ctx):
    return ctx.obj['dashboard']


def _load(dashboard):
    try:
        return dashboard.load()
    except SessionExpired:
        raise click.ClickException("Not logged in. Run `tradelog login` first.")


def _print_table(view):
    if not view.rows:
        click.echo("No trades found. Add your first trade with `tradelog add`.")
    else:
        header = f"{'ID':>5}  {'Date':<13} {'Symbol':<8} {'Strike':>9} {'Type':<4} {'Qty':>4} {'Buy':>8} {'Sell':>8} {'P/L':>11} {'Return':>9}"
        click.echo(header)
        click.echo('-' * len(header))
        for t in view.rows:
            click.echo(
                f"{t.id:>5}  {format_date(t.trade_date):<13} {t.symbol:<8} {t.strike_price:>9.2f} "
                f"{t.option_type:<4} {t.quantity:>4} {t.buy_price:>8.2f} {t.sell_price:>8.2f} "
                + click.style(f"{format_signed_money(t.pl):>11}", fg='green' if t.pl >= 0 else 'red')
                + ' '
                + click.style(f"{format_signed_pct(t.return_pct):>9}", fg='green' if t.return_pct >= 0 else 'red')
            )
    click.echo(view.page_info)


def _apply_range(dashboard, range_, date_from, date_to):
    if date_from or date_to:
        return dashboard.apply_custom_range(date_from, date_to)
    if range_ and range_ != 'all':
        return dashboard.filter_range(range_)
    return dashboard.view


range_options = [
    click.option('--range', 'range_', default='all', show_default=True,
                 help="Days back from today, or 'all'."),
    click.option('--from', 'date_from', type=click.DateTime(formats=['%Y-%m-%d']), default=None),
    click.option('--to', 'date_to', type=click.DateTime(formats=['%Y-%m-%d']), default=None),
]


def with_range(func):
    for option in reversed(range_options):
        func = option(func)
    return func


def _as_date(value):
    return value.date() if value is not None else None


@click.group()
@click.option('--api-url', envvar='TRADELOG_API_URL', default=None, help="Trade log server URL.")
@click.option('--page-size', default=PAGE_SIZE, show_default=True)
@click.pass_context
def cli(ctx, api_url, page_size):
    """Options trade log dashboard"""
    client = TradeApiClient(base_url=api_url)
    dashboard = TradeDashboard(
        client,
        notifier=Notifier(sink=_echo_notification),
        page_size=page_size,
        confirm=lambda message: click.confirm(message, default=False),
    )
    ctx.obj = {'client': client, 'dashboard': dashboard}


@cli.command()
@click.option('--email', prompt=True)
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True)
@click.pass_context
def register(ctx, email, password):
    """Create an account"""
    try:
        data = ctx.obj['client'].register(email, password)
    except ApiError as e:
        raise click.ClickException(e.message)
    click.secho(data.get('message', 'User registered'), fg='green')


@cli.command()
@click.option('--email', prompt=True)
@click.option('--password', prompt=True, hide_input=True)
@click.pass_context
def login(ctx, email, password):
    """Log in and cache the session token"""
    try:
        ctx.obj['client'].login(email, password)
    except ApiError as e:
        raise click.ClickException(e.message)
    click.secho(f"Welcome back, {email}!", fg='green')


@cli.command()
@click.pass_context
def logout(ctx):
    """Forget the cached session token"""
    _dashboard(ctx).logout()


@cli.command()
@with_range
@click.option('--page', default=1, show_default=True)
@click.pass_context
def trades(ctx, range_, date_from, date_to, page):
    """List trades, newest first"""
    dashboard = _dashboard(ctx)
    _load(dashboard)
    _apply_range(dashboard, range_, _as_date(date_from), _as_date(date_to))
    dashboard.go_to_page(page)
    _print_table(dashboard.view)


@cli.command()
@with_range
@click.pass_context
def summary(ctx, range_, date_from, date_to):
    """Total trades, win rate, average return and total P/L"""
    dashboard = _dashboard(ctx)
    _load(dashboard)
    view = _apply_range(dashboard, range_, _as_date(date_from), _as_date(date_to))
    for label, value in format_summary(view.summary).items():
        click.echo(f"{label:<14}{value}")


def _trade_options(func):
    options = [
        click.option('--date', 'trade_date', type=click.DateTime(formats=['%Y-%m-%d']),
                     default=lambda: date.today().isoformat(), show_default='today'),
        click.option('--symbol', required=True),
        click.option('--strike', 'strike_price', type=float, required=True),
        click.option('--type', 'option_type', type=click.Choice(['Call', 'Put']), required=True),
        click.option('--quantity', type=int, required=True),
        click.option('--buy', 'buy_price', type=float, required=True),
        click.option('--sell', 'sell_price', type=float, required=True),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@cli.command()
@_trade_options
@click.pass_context
def add(ctx, trade_date, symbol, strike_price, option_type, quantity, buy_price, sell_price):
    """Log a new trade"""
    dashboard = _dashboard(ctx)
    form = TradeFormInput(
        date=trade_date.date(), symbol=symbol, strike_price=strike_price,
        option_type=option_type, quantity=quantity, buy_price=buy_price, sell_price=sell_price,
    )
    if not dashboard.save_trade(form):
        sys.exit(1)


@cli.command()
@click.argument('trade_id', type=int)
@_trade_options
@click.pass_context
def edit(ctx, trade_id, trade_date, symbol, strike_price, option_type, quantity, buy_price, sell_price):
    """Replace every field of an existing trade"""
    dashboard = _dashboard(ctx)
    _load(dashboard)
    if dashboard.dispatch('edit', trade_id) is None:
        raise click.ClickException(f"Trade {trade_id} not found")
    form = TradeFormInput(
        date=trade_date.date(), symbol=symbol, strike_price=strike_price,
        option_type=option_type, quantity=quantity, buy_price=buy_price, sell_price=sell_price,
        trade_id=trade_id,
    )
    if not dashboard.save_trade(form):
        sys.exit(1)


@cli.command()
@click.argument('trade_id', type=int)
@click.pass_context
def delete(ctx, trade_id):
    """Delete a trade"""
    dashboard = _dashboard(ctx)
    _load(dashboard)
    if not dashboard.dispatch('delete', trade_id):
        sys.exit(1)


@cli.command()
@with_range
@click.option('--out', 'out_dir', type=click.Path(file_okay=False), default='.', show_default=True)
@click.pass_context
def export(ctx, range_, date_from, date_to, out_dir):
    """Export the filtered trades to CSV"""
    dashboard = _dashboard(ctx)
    _load(dashboard)
    _apply_range(dashboard, range_, _as_date(date_from), _as_date(date_to))
    path = dashboard.export_csv(out_dir)
    if path:
        click.echo(str(path))


@cli.command()
@with_range
@click.option('--out', 'out_file', type=click.Path(dir_okay=False), default='trades_report.html', show_default=True)
@click.pass_context
def report(ctx, range_, date_from, date_to, out_file):
    """Write a printable HTML report of the filtered trades"""
    dashboard = _dashboard(ctx)
    _load(dashboard)
    _apply_range(dashboard, range_, _as_date(date_from), _as_date(date_to))
    html = dashboard.open_report()
    if html:
        Path(out_file).write_text(html, encoding='utf-8')
        click.echo(out_file)


@cli.command()
@with_range
@click.option('--out', 'out_dir', type=click.Path(file_okay=False), default='charts', show_default=True)
@click.pass_context
def charts(ctx, range_, date_from, date_to, out_dir):
    """Write the four P/L charts as HTML files"""
    dashboard = _dashboard(ctx)
    _load(dashboard)
    _apply_range(dashboard, range_, _as_date(date_from), _as_date(date_to))
    if not len(dashboard.charts):
        dashboard.notifier.warning("No trades to chart!")
        return
    for path in dashboard.charts.write_html(out_dir):
        click.echo(str(path))


if __name__ == '__main__':
    cli()
