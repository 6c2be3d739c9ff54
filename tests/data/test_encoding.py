"""
Tests for Design Matrix Encoding

Tests treatment coding and column alignment between datasets.
"""

import numpy as np
import pandas as pd

from credit_default.data.encoding import build_design_matrix, design_columns, indicator_name
from credit_default.data.loader import Dataset
from credit_default.data.schema import ColumnSpec, DatasetSchema


class TestDesignColumns:
    """Test suite for design_columns."""

    def test_credit_schema_has_twenty_predictors(self, schema):
        columns = design_columns(schema)

        assert len(columns) == 20
        assert columns[:2] == ['limit_bal', 'sex_2']
        assert columns[2:5] == ['education_2', 'education_3', 'education_4']
        assert columns[5:7] == ['marriage_2', 'marriage_3']
        assert columns[7] == 'age'

    def test_reference_level_has_no_column(self, schema):
        columns = design_columns(schema)

        assert 'sex_1' not in columns
        assert 'education_1' not in columns
        assert 'marriage_1' not in columns

    def test_indicator_name(self):
        assert indicator_name('education', '3') == 'education_3'


class TestBuildDesignMatrix:
    """Test suite for build_design_matrix."""

    def test_matrix_shape_and_dtype(self, train_dataset):
        X = build_design_matrix(train_dataset)

        assert X.shape == (train_dataset.n_records, 20)
        assert all(dtype == float for dtype in X.dtypes)

    def test_indicator_values(self, train_dataset):
        X = build_design_matrix(train_dataset)
        education = train_dataset.features['education'].astype(str)

        np.testing.assert_array_equal(X['education_3'].to_numpy(), (education == '3').astype(float))
        assert (X.loc[education == '1', ['education_2', 'education_3', 'education_4']] == 0).all().all()

    def test_columns_identical_when_levels_absent(self):
        schema = DatasetSchema(columns=(
            ColumnSpec(name='age'),
            ColumnSpec(name='marriage', kind='categorical', levels=('1', '2', '3')),
        ))
        features = pd.DataFrame({
            'age': [30.0, 40.0],
            'marriage': pd.Categorical(['1', '1'], categories=['1', '2', '3']),
        })
        other = pd.DataFrame({
            'age': [50.0],
            'marriage': pd.Categorical(['3'], categories=['1', '2', '3']),
        })

        X_a = build_design_matrix(Dataset(features=features, schema=schema))
        X_b = build_design_matrix(Dataset(features=other, schema=schema))

        assert list(X_a.columns) == list(X_b.columns) == ['age', 'marriage_2', 'marriage_3']
        assert X_a[['marriage_2', 'marriage_3']].sum().sum() == 0
        assert X_b.loc[0, 'marriage_3'] == 1.0

    def test_training_and_scoring_align(self, train_dataset, scoring_dataset):
        X_train = build_design_matrix(train_dataset)
        X_score = build_design_matrix(scoring_dataset)

        assert list(X_train.columns) == list(X_score.columns)
