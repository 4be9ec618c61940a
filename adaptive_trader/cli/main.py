"""
Adaptive Trader Command Line Interface.

Entry point for the trading service, state resets, status and backtests.
"""

import json
import logging
import sys
from datetime import datetime, timedelta, timezone

import click
from rich.console import Console
from rich.json import JSON
from rich.table import Table

from adaptive_trader.backtest import BacktestConfig, IntradayBacktester
from adaptive_trader.config import TraderConfig, load_config
from adaptive_trader.data import (
    AlpacaClient, YahooClient, UniverseBuilder, stratified_sample,
)
from adaptive_trader.data.asset_lists import CATEGORIES
from adaptive_trader.engine import BatchLoader, CycleOrchestrator, TradingService
from adaptive_trader.errors import ConfigurationError, PersistenceError
from adaptive_trader.storage import SQLiteKVStore, StateStore
from adaptive_trader.strategies import SignalCombiner

console = Console()


def _setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load(config_path: str = None) -> TraderConfig:
    config = load_config(config_path)
    _setup_logging(config.system.log_level)
    return config


def _get_store(config: TraderConfig) -> StateStore:
    return StateStore(
        SQLiteKVStore(str(config.system.db_path)),
        max_trades=config.portfolio.max_trades_kept,
        max_history=config.portfolio.max_history_points,
    )


def _make_combiner(config: TraderConfig) -> SignalCombiner:
    signals = config.signals
    return SignalCombiner(
        buy_threshold=signals.buy_threshold,
        strong_buy_threshold=signals.strong_buy_threshold,
        sell_threshold=signals.sell_threshold,
        strong_sell_threshold=signals.strong_sell_threshold,
        intraday_window=config.data.intraday_window,
        vwap_window=config.data.vwap_window,
    )


def _make_primary(config: TraderConfig) -> AlpacaClient:
    data = config.data
    return AlpacaClient(
        api_key=config.credentials.alpaca_api_key,
        secret_key=config.credentials.alpaca_secret_key,
        data_url=data.alpaca_data_url,
        trading_url=data.alpaca_trading_url,
        batch_size=data.alpaca_batch_size,
        request_delay=data.alpaca_request_delay,
        max_retries=data.alpaca_max_retries,
        page_limit=data.alpaca_page_limit,
        timeout=(data.connect_timeout, data.read_timeout),
    )


def _make_secondary(config: TraderConfig) -> YahooClient:
    data = config.data
    return YahooClient(
        batch_size=data.secondary_batch_size,
        batch_delay=data.secondary_batch_delay,
        max_workers=data.max_workers,
    )


def build_orchestrator(config: TraderConfig) -> CycleOrchestrator:
    """
    Wire the live orchestrator from configuration.

    Raises:
        ConfigurationError: if the configuration has any issue
    """
    issues = config.validate()
    if issues:
        raise ConfigurationError("; ".join(issues))

    primary = _make_primary(config)
    secondary = _make_secondary(config)
    loader = BatchLoader(_make_combiner(config), primary, secondary, config.data)
    universe = UniverseBuilder(
        timezone=config.system.market_timezone,
        extra_symbols_file=config.data.universe_file,
    )
    return CycleOrchestrator(
        config, _get_store(config), loader,
        broker=primary, secondary=secondary, universe=universe,
    )


def _build_or_exit(config: TraderConfig) -> CycleOrchestrator:
    try:
        return build_orchestrator(config)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)


def _print_json(data, indent=2):
    """Pretty print JSON data."""
    console.print(JSON(json.dumps(data, indent=indent, default=str)))


def _print_table(title, rows, headers):
    """Print a table."""
    table = Table(title=title)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*[str(v) for v in row])
    console.print(table)


# ─────────────────────────────────────────────────────────────────
# CLI GROUP
# ─────────────────────────────────────────────────────────────────

@click.group()
@click.option("--config", default=None, help="Path to config YAML")
@click.pass_context
def cli(ctx, config):
    """Adaptive Trader - regime-adaptive, self-tuning trading engine"""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config


# ─────────────────────────────────────────────────────────────────
# SERVICE COMMANDS
# ─────────────────────────────────────────────────────────────────

@cli.command()
@click.option("--max-cycles", default=None, type=int, help="Stop after N cycles")
@click.pass_context
def run(ctx, max_cycles):
    """Run trading cycles continuously on the configured interval."""
    config = _load(ctx.obj.get("config_path"))
    if config.system.run_once:
        ctx.invoke(run_once)
        return

    orchestrator = _build_or_exit(config)
    service = TradingService(orchestrator, config.system.run_interval_seconds)
    service.install_signal_handlers()
    service.run_forever(max_cycles=max_cycles)


@cli.command(name="run-once")
@click.pass_context
def run_once(ctx):
    """Run a single trading cycle and exit."""
    config = _load(ctx.obj.get("config_path"))
    orchestrator = _build_or_exit(config)
    service = TradingService(orchestrator, config.system.run_interval_seconds)

    try:
        report = service.run_once()
    except PersistenceError as e:
        click.echo(f"Cycle finished but state was not fully saved: {e}", err=True)
        sys.exit(1)

    click.echo(report.summary())
    if report.trades:
        _print_table(
            "Trades",
            [[t.action.value, t.symbol, f"{t.shares:.4f}", f"${t.price:,.2f}", t.reason]
             for t in report.trades],
            ["Action", "Symbol", "Shares", "Price", "Reason"],
        )


# ─────────────────────────────────────────────────────────────────
# STATE COMMANDS
# ─────────────────────────────────────────────────────────────────

@cli.command()
@click.pass_context
def reset(ctx):
    """Reset portfolio, trades, signals, history and benchmark."""
    config = _load(ctx.obj.get("config_path"))
    store = _get_store(config)
    try:
        portfolio = store.reset(config.portfolio.initial_capital)
    except PersistenceError as e:
        click.echo(f"Reset failed: {e}", err=True)
        sys.exit(1)
    click.echo(f"Portfolio reset: ${portfolio.cash:,.2f} cash, no holdings")


@cli.command(name="reset-learning")
@click.pass_context
def reset_learning(ctx):
    """Reset learned regime weights and parameters to defaults."""
    config = _load(ctx.obj.get("config_path"))
    store = _get_store(config)
    try:
        store.reset_learning(config.default_params())
    except PersistenceError as e:
        click.echo(f"Reset failed: {e}", err=True)
        sys.exit(1)
    click.echo("Learning state reset to defaults")


@cli.command()
@click.option("--trades", "trade_limit", default=10, help="Recent trades to show")
@click.option("--json", "as_json", is_flag=True, help="Dump raw state as JSON")
@click.pass_context
def status(ctx, trade_limit, as_json):
    """Show persisted portfolio, holdings, trades and learning state."""
    config = _load(ctx.obj.get("config_path"))
    store = _get_store(config)

    if as_json:
        _print_json(store.snapshot())
        return

    portfolio = store.load_portfolio(config.portfolio.initial_capital)
    last_run = store.get_last_run()
    _print_table(
        "Portfolio",
        [[f"${portfolio.total_value:,.2f}", f"${portfolio.cash:,.2f}",
          f"${portfolio.invested_value:,.2f}", f"{portfolio.total_return_pct:+.2f}%",
          portfolio.num_holdings, last_run.isoformat() if last_run else "never"]],
        ["Value", "Cash", "Invested", "Return", "Positions", "Last Run"],
    )

    if portfolio.holdings:
        _print_table(
            "Holdings",
            [[h.symbol, f"{h.shares:.4f}", f"${h.avg_cost:,.2f}", f"${h.current_price:,.2f}",
              f"${h.market_value:,.2f}", f"{h.gain_loss_percent:+.2f}%", h.bars_held]
             for h in sorted(portfolio.holdings.values(), key=lambda h: -h.market_value)],
            ["Symbol", "Shares", "Avg Cost", "Price", "Value", "P/L", "Bars"],
        )

    trades = store.get_trades(trade_limit)
    if trades:
        _print_table(
            f"Recent Trades ({len(trades)})",
            [[t.timestamp.strftime("%Y-%m-%d %H:%M"), t.action.value, t.symbol,
              f"{t.shares:.4f}", f"${t.price:,.2f}",
              f"{t.gain_loss_percent:+.2f}%" if t.gain_loss_percent is not None else "", t.reason]
             for t in trades],
            ["Time", "Action", "Symbol", "Shares", "Price", "P/L", "Reason"],
        )

    learning = store.load_learning(config.default_params())
    _print_table(
        f"Learning ({learning.total_trades_analyzed} trades, "
        f"{'warm' if learning.warmup_complete else 'warming up'})",
        [[regime, f"{w['trend']:.4f}", f"{w['reversion']:.4f}"]
         for regime, w in sorted(learning.regime_weights.items())],
        ["Regime", "Trend", "Reversion"],
    )
    _print_table(
        "Parameters",
        [[name, value] for name, value in sorted(learning.params.items())],
        ["Parameter", "Value"],
    )


# ─────────────────────────────────────────────────────────────────
# BACKTEST
# ─────────────────────────────────────────────────────────────────

def _backtest_bars(config: TraderConfig, source: str, symbols, days: int):
    """Intraday (5-minute) and daily bars for a replay over `days` sessions."""
    now = datetime.now(timezone.utc)
    calendar_days = int(days * 1.5) + 5

    if source == "alpaca":
        issues = [i for i in config.validate() if "key" in i]
        if issues:
            raise ConfigurationError("; ".join(issues))
        client = _make_primary(config)
        intraday = client.fetch_bars(symbols, "5Min", now - timedelta(days=calendar_days))
        daily = client.fetch_bars(
            symbols, "1Day",
            now - timedelta(days=calendar_days + config.data.daily_lookback_days),
        )
        return intraday, daily

    # yfinance serves at most 60 days of 5-minute bars
    client = _make_secondary(config)
    intraday = client.fetch_many(symbols, period=f"{min(calendar_days, 59)}d", interval="5m")
    daily = client.fetch_many(symbols, period="1y", interval="1d")
    return intraday, daily


@cli.command()
@click.option("--days", default=30, help="Trading sessions to replay")
@click.option("--symbols", "count", default=50, help="Number of sampled symbols")
@click.option("--seed", default=42, help="Sampling seed")
@click.option("--source", default="yahoo", type=click.Choice(["yahoo", "alpaca"]))
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def backtest(ctx, days, count, seed, source, as_json):
    """Replay recent intraday history through the trading cycle."""
    config = _load(ctx.obj.get("config_path"))

    symbols = stratified_sample(CATEGORIES, count, seed=seed)
    click.echo(f"Backtesting {len(symbols)} symbols over {days} sessions ({source})...")

    try:
        intraday, daily = _backtest_bars(config, source, symbols, days)
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    if not intraday:
        click.echo("No intraday data available", err=True)
        sys.exit(1)

    result = IntradayBacktester(config, BacktestConfig(days=days)).run(intraday, daily)

    if as_json:
        _print_json(result.to_dict())
        return

    _print_table(
        "Backtest",
        [[f"${result.initial_capital:,.2f}", f"${result.final_value:,.2f}",
          f"{result.total_return_pct:+.2f}%", f"{result.sharpe_ratio:.3f}",
          f"{result.max_drawdown_pct:.2f}%", result.total_trades,
          f"{result.win_rate:.1f}%", f"${result.transaction_costs:,.2f}"]],
        ["Start", "End", "Return", "Sharpe", "Max DD", "Trades", "Win Rate", "Costs"],
    )


# ─────────────────────────────────────────────────────────────────
# ENTRY POINT
# ─────────────────────────────────────────────────────────────────

def main():
    cli(obj={})


if __name__ == "__main__":
    main()
