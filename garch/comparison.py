"""Information criteria and model comparison for fitted GARCH models"""

import logging
from typing import Dict

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

CRITERIA = ('Akaike_AIC', 'Bayes_BIC', 'Shibata', 'Hannan_Quinn')

def information_criteria(result) -> Dict[str, float]:
    """
    Per-observation information criteria of a fitted model.

    All four are -2 LogLik / n plus a penalty scaled by n, so values are
    comparable across models fitted on the same sample. Lower is better.
    """
    n = result.nobs
    k = result.num_params
    ll = result.loglikelihood

    return {
        'Akaike_AIC': (-2 * ll + 2 * k) / n,
        'Bayes_BIC': (-2 * ll + k * np.log(n)) / n,
        'Shibata': -2 * ll / n + np.log((n + 2 * k) / n),
        'Hannan_Quinn': (-2 * ll + 2 * k * np.log(np.log(n))) / n
    }

def compare_models(results: Dict[str, object]) -> pd.DataFrame:
    """Information criteria table, one row per model, best AIC first"""
    if not results:
        raise ValueError("No fitted models to compare")

    nobs = {result.nobs for result in results.values()}
    if len(nobs) > 1:
        raise ValueError(f"Models fitted on different samples: {sorted(nobs)}")

    records = []
    for name, result in results.items():
        records.append({
            'Model': name,
            **information_criteria(result),
            'LogLik': result.loglikelihood,
            'Params': result.num_params
        })

    table = pd.DataFrame(records).set_index('Model').sort_values('Akaike_AIC')
    logger.info(f"\nInformation criteria (lower is better):\n{table.to_string()}")
    return table

def preferred_model(table: pd.DataFrame, criterion: str = 'Akaike_AIC') -> str:
    """Name of the model with the lowest value of `criterion`"""
    if criterion not in table.columns:
        raise ValueError(f"Unknown criterion '{criterion}', expected one of {CRITERIA}")
    return str(table[criterion].idxmin())
