"""
Configuration for the S&P 500 volatility analysis.

Defaults reproduce the reference study (^GSPC adjusted close since 2016,
ARMA(1,1) mean, GARCH(1,1) variance, Student-t innovations, 30 day horizon).
Any field can be overridden through a VOL_* environment variable or a .env
file in the project root.
"""
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

ENV_PREFIX = 'VOL_'
TRADING_DAYS_PER_YEAR = 252


@dataclass
class AnalysisConfig:
    """Parameters driving every stage of the pipeline"""
    ticker: str = '^GSPC'
    start_date: str = '2016-01-01'
    end_date: Optional[str] = None
    price_column: str = 'Adj Close'
    forecast_horizon: int = 30
    significance_level: float = 0.05
    arch_lags: int = 10
    ljung_box_lags: int = 10
    arma_order: Tuple[int, int] = (1, 1)
    garch_order: Tuple[int, int] = (1, 1)
    distribution: str = 't'
    var_level: float = 0.01
    return_scale: float = 100.0
    output_dir: Path = field(default_factory=lambda: Path('results'))
    data_file: Optional[Path] = None
    show_plots: bool = False
    log_level: str = 'INFO'

    def validate(self) -> 'AnalysisConfig':
        """Raise ValueError on settings no stage can work with"""
        if self.forecast_horizon < 1:
            raise ValueError(f"Forecast horizon must be positive: {self.forecast_horizon}")
        if not 0 < self.significance_level < 1:
            raise ValueError(f"Significance level outside (0, 1): {self.significance_level}")
        if not 0 < self.var_level < 1:
            raise ValueError(f"VaR level outside (0, 1): {self.var_level}")
        if self.return_scale <= 0:
            raise ValueError(f"Return scale must be positive: {self.return_scale}")
        if self.distribution not in ('normal', 't', 'skewt', 'ged'):
            raise ValueError(f"Unsupported distribution: {self.distribution}")
        return self

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> 'AnalysisConfig':
        """Build a config from defaults overridden by VOL_* variables"""
        if env_file is None:
            env_file = Path(__file__).parent / '.env'
        load_dotenv(dotenv_path=env_file)

        overrides = {}
        for f in fields(cls):
            raw = os.getenv(f"{ENV_PREFIX}{f.name.upper()}")
            if raw is None or raw == '':
                continue
            overrides[f.name] = _parse_value(f.name, raw)

        return cls(**overrides).validate()


def _parse_value(name: str, raw: str):
    """Convert an environment string to the type of the named field"""
    if name in ('forecast_horizon', 'arch_lags', 'ljung_box_lags'):
        return int(raw)
    if name in ('significance_level', 'var_level', 'return_scale'):
        return float(raw)
    if name in ('arma_order', 'garch_order'):
        p, q = (int(part) for part in raw.split(','))
        return (p, q)
    if name in ('output_dir', 'data_file'):
        return Path(raw)
    if name == 'show_plots':
        return raw.strip().lower() in ('1', 'true', 'yes', 'on')
    return raw
