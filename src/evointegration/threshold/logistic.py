"""Logistic-regression inflection point.

Fits logit P(y = 1) = b0 + b1·x without regularisation and reports the
predictor value where the fitted log-odds cross zero, x* = -b0 / b1.
Outcomes strictly between 0 and 1 are treated as observed proportions:
each row contributes a success with weight y and a failure with weight
1 - y, which gives the same maximum-likelihood fit as a binomial GLM on
proportions.
"""

import warnings

import numpy as np
from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model import LogisticRegression

from ..exceptions import FitError, InputError
from ..logging_config import get_logger

logger = get_logger(__name__)


def logistic_inflection(x: np.ndarray, y: np.ndarray, max_iter: int = 1000) -> float:
    """
    Estimate the threshold as the 50% point of a logistic fit.

    Args:
        x: Predictor values (finite)
        y: Outcomes in [0, 1]

    Returns:
        -intercept / slope

    Raises:
        InputError: If outcomes fall outside [0, 1].
        FitError: If the predictor is constant, the outcome has a single
            class or the slope is zero.
    """
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if np.any((y < 0) | (y > 1)):
        raise InputError("logistic inflection needs outcomes in [0, 1]")
    if x.size == 0 or np.ptp(x) == 0:
        raise FitError("predictor is constant")

    features = np.concatenate([x, x])[:, None]
    labels = np.concatenate([np.ones_like(y), np.zeros_like(y)]).astype(int)
    weights = np.concatenate([y, 1.0 - y])

    keep = weights > 0
    if np.unique(labels[keep]).size < 2:
        raise FitError("outcome has a single class")

    model = LogisticRegression(C=np.inf, max_iter=max_iter)
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ConvergenceWarning)
        model.fit(features[keep], labels[keep], sample_weight=weights[keep])
    for warning in caught:
        # Separable outcomes drive the slope towards infinity
        logger.debug("Logistic fit: %s", warning.message)

    intercept = float(model.intercept_[0])
    slope = float(model.coef_[0, 0])
    if slope == 0 or not np.isfinite(slope):
        raise FitError("logistic slope is zero or undefined")

    return -intercept / slope
