"""
Tests for Random Forest Model

Tests max_features resolution, estimator construction and fitting.
"""

import numpy as np
import pytest

from sklearn.ensemble import RandomForestClassifier

from credit_default.models.random_forest_model import RandomForestModel, resolve_max_features


class TestResolveMaxFeatures:
    """Test suite for resolve_max_features."""

    def test_documented_grid_on_twenty_predictors(self):
        assert resolve_max_features([2, 4, 6, None], 20) == [2, 4, 6, 20]

    def test_all_means_every_feature(self):
        assert resolve_max_features(['all'], 20) == [20]

    def test_counts_clipped_and_deduplicated(self):
        assert resolve_max_features([2, 4, 6, None], 4) == [2, 4]

    def test_unknown_feature_count_leaves_values(self):
        assert resolve_max_features([2, None], None) == [2, None]

    def test_named_strategies_passed_through(self):
        assert resolve_max_features(['sqrt', 0.5], 20) == ['sqrt', 0.5]


class TestRandomForestEstimator:
    """Test suite for build_estimator and the grid."""

    def test_defaults(self):
        estimator = RandomForestModel(random_state=407267).build_estimator()

        assert isinstance(estimator, RandomForestClassifier)
        assert estimator.n_estimators == 500
        assert estimator.random_state == 407267

    def test_all_maps_to_none(self):
        estimator = RandomForestModel().build_estimator({'max_features': 'all'})

        assert estimator.max_features is None

    def test_grid_resolved_against_features(self):
        model = RandomForestModel({'tuning': {'param_grid': {'max_features': [2, 4, 6, None]}}})

        assert model.get_tuning_param_grid(20) == {'max_features': [2, 4, 6, 20]}


class TestRandomForestFit:
    """Test suite for fitting."""

    def test_fit_reproducible(self, design_data):
        X, y = design_data
        config = {'default_params': {'n_estimators': 25, 'max_features': 4}}

        first = RandomForestModel(config, random_state=407267).fit(X, y)
        second = RandomForestModel(config, random_state=407267).fit(X, y)

        np.testing.assert_array_equal(first.predict_proba(X), second.predict_proba(X))

    def test_feature_importances(self, design_data):
        X, y = design_data
        model = RandomForestModel({'default_params': {'n_estimators': 10}}, random_state=1).fit(X, y)

        importance = model.get_feature_importance()

        assert set(importance) == set(X.columns)
        assert sum(importance.values()) == pytest.approx(1.0)
