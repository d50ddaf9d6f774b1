from types import SimpleNamespace

import numpy as np
import pytest

from garch import compare_models, information_criteria, preferred_model
from garch.comparison import CRITERIA

def fake_result(loglikelihood, num_params, nobs=1000):
    return SimpleNamespace(loglikelihood=loglikelihood, num_params=num_params, nobs=nobs)

def test_information_criteria_values():
    criteria = information_criteria(fake_result(3000.0, 7, nobs=1000))

    assert set(criteria) == set(CRITERIA)
    assert criteria['Akaike_AIC'] == pytest.approx((-6000 + 14) / 1000)
    assert criteria['Bayes_BIC'] == pytest.approx((-6000 + 7 * np.log(1000)) / 1000)
    assert criteria['Shibata'] == pytest.approx(-6.0 + np.log(1014 / 1000))
    assert criteria['Hannan_Quinn'] == pytest.approx((-6000 + 14 * np.log(np.log(1000))) / 1000)

def test_penalty_grows_with_parameters():
    small = information_criteria(fake_result(3000.0, 7))
    large = information_criteria(fake_result(3000.0, 8))
    for name in CRITERIA:
        assert large[name] > small[name]

def test_compare_models_sorted_by_aic():
    table = compare_models({
        'sGARCH': fake_result(3000.0, 7),
        'gjrGARCH': fake_result(3020.0, 8),
    })

    assert list(table.index) == ['gjrGARCH', 'sGARCH']
    assert table.index.name == 'Model'
    assert list(table.columns) == list(CRITERIA) + ['LogLik', 'Params']
    assert table.loc['gjrGARCH', 'Params'] == 8
    assert preferred_model(table) == 'gjrGARCH'

def test_preferred_model_by_other_criterion():
    # one extra parameter for a tiny likelihood gain: AIC and BIC disagree
    table = compare_models({
        'small': fake_result(3000.0, 7),
        'large': fake_result(3002.0, 8),
    })
    assert preferred_model(table, 'Akaike_AIC') == 'large'
    assert preferred_model(table, 'Bayes_BIC') == 'small'

def test_compare_models_errors():
    with pytest.raises(ValueError, match="No fitted models"):
        compare_models({})

    with pytest.raises(ValueError, match="different samples"):
        compare_models({
            'a': fake_result(3000.0, 7, nobs=1000),
            'b': fake_result(3000.0, 7, nobs=999),
        })

    table = compare_models({'a': fake_result(3000.0, 7)})
    with pytest.raises(ValueError, match="Unknown criterion"):
        preferred_model(table, 'DIC')
