import os
from pathlib import Path

import pytest

from config import AnalysisConfig

def test_defaults_match_reference_study():
    config = AnalysisConfig()
    assert config.ticker == '^GSPC'
    assert config.start_date == '2016-01-01'
    assert config.forecast_horizon == 30
    assert config.arma_order == (1, 1)
    assert config.garch_order == (1, 1)
    assert config.distribution == 't'
    assert config.significance_level == 0.05

def test_from_env_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv('VOL_TICKER', 'SPY')
    monkeypatch.setenv('VOL_FORECAST_HORIZON', '10')
    monkeypatch.setenv('VOL_ARMA_ORDER', '2,1')
    monkeypatch.setenv('VOL_SHOW_PLOTS', 'true')
    monkeypatch.setenv('VOL_OUTPUT_DIR', str(tmp_path / 'out'))

    config = AnalysisConfig.from_env(env_file=tmp_path / '.env')

    assert config.ticker == 'SPY'
    assert config.forecast_horizon == 10
    assert config.arma_order == (2, 1)
    assert config.show_plots is True
    assert config.output_dir == Path(tmp_path / 'out')

def test_from_env_reads_dotenv_file(monkeypatch, tmp_path):
    # load_dotenv writes to os.environ; keep it out of other tests
    monkeypatch.setattr(os, 'environ', dict(os.environ))
    os.environ.pop('VOL_VAR_LEVEL', None)
    env_file = tmp_path / '.env'
    env_file.write_text("VOL_VAR_LEVEL=0.05\n")

    config = AnalysisConfig.from_env(env_file=env_file)
    assert config.var_level == pytest.approx(0.05)

@pytest.mark.parametrize("overrides", [
    {'forecast_horizon': 0},
    {'significance_level': 1.5},
    {'var_level': 0.0},
    {'return_scale': -1.0},
    {'distribution': 'cauchy'},
])
def test_validate_rejects_bad_settings(overrides):
    with pytest.raises(ValueError):
        AnalysisConfig(**overrides).validate()
