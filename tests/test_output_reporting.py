import os

import pandas as pd
import pytest

from aerolift.analysis import create_results_dataframe, run_model
from aerolift.output import add_reported_column, save_data_to_csv, save_samples_to_csv
from aerolift.stats import sampling


@pytest.fixture
def lift_result():
    with sampling(seed=4, sample_size=600):
        yield run_model("lift-equation")


def test_add_reported_column(lift_result):
    df = add_reported_column(create_results_dataframe([lift_result]))
    assert "Reported" in df.columns
    assert df["Reported"].str.contains("±").all()


def test_add_reported_column_requires_columns():
    with pytest.raises(KeyError, match="Std Dev"):
        add_reported_column(pd.DataFrame({"Mean": [1.0], "Unit": ["N"]}))


def test_save_data_to_csv(tmp_path, lift_result):
    path = save_data_to_csv(create_results_dataframe([lift_result]), str(tmp_path))
    assert os.path.basename(path) == "distribution_summary.csv"
    df = pd.read_csv(path)
    assert len(df) == 7
    assert "Reported" in df.columns


def test_save_samples_to_csv(tmp_path, lift_result):
    path = save_samples_to_csv(lift_result, str(tmp_path), size=300)
    assert os.path.basename(path) == "lift-equation_samples.csv"
    df = pd.read_csv(path)
    assert df.shape == (300, 7)
    assert "Cl" in df.columns
    assert "F_lift_adjusted (N)" in df.columns


def test_save_samples_defaults_to_canonical_size(tmp_path, lift_result):
    with sampling(sample_size=250):
        path = save_samples_to_csv(lift_result, str(tmp_path))
    assert len(pd.read_csv(path)) == 250


def test_save_samples_requires_result_keys(tmp_path):
    with pytest.raises(KeyError, match="inputs"):
        save_samples_to_csv({"model": "x", "outputs": []}, str(tmp_path))
