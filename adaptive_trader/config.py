"""
Configuration module for the adaptive trading engine.

Dataclass-based configuration with YAML loading and environment overrides.
Credentials are read from the environment (optionally via a .env file).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional
import os

import yaml
from dotenv import load_dotenv


@dataclass
class SystemConfig:
    """Process-level settings."""
    log_level: str = "INFO"
    db_path: Path = field(default_factory=lambda: Path("adaptive_trader.db"))
    run_interval_seconds: float = 600.0  # 10 minutes between cycle starts
    run_once: bool = False
    market_timezone: str = "America/New_York"


@dataclass
class PortfolioConfig:
    """Portfolio and position-count limits."""
    initial_capital: float = 10_000.0
    max_position_size: float = 0.07  # Max 7% of portfolio per position
    max_positions: int = 15
    min_trade_value: float = 15.0
    target_cash_ratio: float = 0.05  # Keep 5% in cash
    max_new_positions_per_cycle: int = 3
    max_trades_kept: int = 100
    max_history_points: int = 1000


@dataclass
class RiskConfig:
    """ATR sizing, exits and guards."""
    risk_per_trade: float = 0.01  # 1% of portfolio at risk per entry
    atr_stop_multiplier: float = 2.0
    atr_profit1_multiplier: float = 3.0
    atr_profit2_multiplier: float = 5.0
    profit1_sell_fraction: float = 0.25
    profit2_sell_fraction: float = 0.50
    sell_signal_fraction: float = 0.75
    min_hold_bars: int = 24  # Cycles before a non-stop exit is allowed
    cooldown_hours: float = 24.0
    transaction_cost_bps: float = 5.0
    max_rotations_per_cycle: int = 3


@dataclass
class SignalConfig:
    """Strategy parameters and recommendation thresholds."""
    buy_threshold: float = 0.35
    strong_buy_threshold: float = 0.55
    sell_threshold: float = -0.35
    strong_sell_threshold: float = -0.55
    adx_threshold: float = 25.0
    regime_min_bars: int = 60
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0
    sma_short: int = 10
    sma_long: int = 50
    bollinger_std_dev: float = 2.0


@dataclass
class LearningConfig:
    """Self-learning adapter settings."""
    warmup_trades: int = 50
    window_size: int = 200
    ema_alpha: float = 0.05
    weight_floor: float = 0.10
    min_samples: int = 5
    tune_interval: int = 50
    history_limit: int = 50
    seed: Optional[int] = 42


@dataclass
class DataConfig:
    """Market-data sources, batching and rate limits."""
    alpaca_data_url: str = "https://data.alpaca.markets"
    alpaca_trading_url: str = "https://paper-api.alpaca.markets"
    alpaca_batch_size: int = 50
    alpaca_request_delay: float = 0.35  # Seconds between pages and batches
    alpaca_max_retries: int = 5
    alpaca_page_limit: int = 10_000
    secondary_batch_size: int = 20
    secondary_batch_delay: float = 0.4
    chunk_size: int = 200
    connect_timeout: float = 5.0
    read_timeout: float = 30.0
    intraday_timeframe: str = "5Min"
    intraday_lookback_days: int = 5
    daily_lookback_days: int = 180
    intraday_window: int = 80
    vwap_window: int = 78
    benchmark_symbol: str = "SPY"
    benchmark_min_days: int = 90
    max_workers: int = 8
    universe_file: Optional[Path] = None  # Extra equities, one per line


@dataclass
class CredentialsConfig:
    """Broker credentials."""
    alpaca_api_key: Optional[str] = field(default_factory=lambda: os.getenv("ALPACA_API_KEY"))
    alpaca_secret_key: Optional[str] = field(default_factory=lambda: os.getenv("ALPACA_SECRET_KEY"))


@dataclass
class TraderConfig:
    """Main configuration container."""
    system: SystemConfig = field(default_factory=SystemConfig)
    portfolio: PortfolioConfig = field(default_factory=PortfolioConfig)
    risk: RiskConfig = field(default_factory=RiskConfig)
    signals: SignalConfig = field(default_factory=SignalConfig)
    learning: LearningConfig = field(default_factory=LearningConfig)
    data: DataConfig = field(default_factory=DataConfig)
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)

    def __post_init__(self):
        self.system.db_path = Path(self.system.db_path)
        if self.data.universe_file:
            self.data.universe_file = Path(self.data.universe_file)

    @property
    def transaction_cost_rate(self) -> float:
        return self.risk.transaction_cost_bps / 10_000

    def default_params(self) -> Dict[str, float]:
        """Starting values for every tunable parameter."""
        return {
            "rsi_oversold": self.signals.rsi_oversold,
            "rsi_overbought": self.signals.rsi_overbought,
            "sma_short": self.signals.sma_short,
            "sma_long": self.signals.sma_long,
            "bollinger_std_dev": self.signals.bollinger_std_dev,
            "buy_threshold": self.signals.buy_threshold,
            "atr_stop_multiplier": self.risk.atr_stop_multiplier,
            "atr_profit1_multiplier": self.risk.atr_profit1_multiplier,
        }

    def validate(self) -> List[str]:
        """Validate configuration. Returns list of issues."""
        issues = []
        if not self.credentials.alpaca_api_key:
            issues.append("Broker API key not set (ALPACA_API_KEY)")
        if not self.credentials.alpaca_secret_key:
            issues.append("Broker secret key not set (ALPACA_SECRET_KEY)")
        if self.portfolio.initial_capital <= 0:
            issues.append("initial_capital must be positive")
        if not 0 < self.portfolio.max_position_size <= 1:
            issues.append("max_position_size must be in (0, 1]")
        if self.signals.buy_threshold >= self.signals.strong_buy_threshold:
            issues.append("buy_threshold should be below strong_buy_threshold")
        if not 0 <= self.learning.weight_floor < 0.5:
            issues.append("weight_floor must be in [0, 0.5)")
        if self.system.run_interval_seconds <= 0:
            issues.append("run_interval_seconds must be positive")
        return issues


def load_config(config_path: str = None) -> TraderConfig:
    """
    Load configuration from YAML file or use defaults.

    Searches for config in order:
    1. Provided path
    2. ./adaptive_trader.yaml
    3. Defaults

    Environment variables (and a .env file, if present) override the
    file for credentials, the database path and the service schedule.
    """
    load_dotenv()

    search_paths = []
    if config_path:
        search_paths.append(Path(config_path))
    search_paths.append(Path("adaptive_trader.yaml"))

    config = None
    for path in search_paths:
        if path.exists():
            config = _load_from_yaml(path)
            break
    if config is None:
        config = TraderConfig()

    _apply_env_overrides(config)
    return config


def _load_from_yaml(path: Path) -> TraderConfig:
    """Parse YAML file into TraderConfig."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}

    config = TraderConfig()

    _update_dataclass(config.system, raw.get("system", {}))
    _update_dataclass(config.portfolio, raw.get("portfolio", {}))
    _update_dataclass(config.risk, raw.get("risk", {}))
    _update_dataclass(config.signals, raw.get("signals", {}))
    _update_dataclass(config.learning, raw.get("learning", {}))
    _update_dataclass(config.data, raw.get("data", {}))

    config.__post_init__()
    return config


def _apply_env_overrides(config: TraderConfig):
    """Environment wins over file values."""
    if os.getenv("ALPACA_API_KEY"):
        config.credentials.alpaca_api_key = os.getenv("ALPACA_API_KEY")
    if os.getenv("ALPACA_SECRET_KEY"):
        config.credentials.alpaca_secret_key = os.getenv("ALPACA_SECRET_KEY")
    if os.getenv("ADAPTIVE_TRADER_DB"):
        config.system.db_path = Path(os.environ["ADAPTIVE_TRADER_DB"])
    if os.getenv("LOG_LEVEL"):
        config.system.log_level = os.environ["LOG_LEVEL"]

    if os.getenv("RUN_INTERVAL_SECONDS"):
        config.system.run_interval_seconds = float(os.environ["RUN_INTERVAL_SECONDS"])
    elif os.getenv("RUN_INTERVAL_MS"):
        config.system.run_interval_seconds = float(os.environ["RUN_INTERVAL_MS"]) / 1000.0

    if os.getenv("RUN_ONCE"):
        config.system.run_once = os.environ["RUN_ONCE"].lower() == "true"


def _update_dataclass(obj, data: dict):
    """Update dataclass fields from a dictionary."""
    for key, value in data.items():
        if hasattr(obj, key):
            setattr(obj, key, value)
