import logging

import numpy as np
import pandas as pd
import pytest

from aerolift.analysis import (
    RESULT_COLUMNS,
    create_results_dataframe,
    print_report,
    run_model,
    run_models,
    summarize_trends,
)
from aerolift.physics import ElevationTrend
from aerolift.physics.bernoulli import BernoulliInputs
from aerolift.stats import gaussian, sampling


@pytest.fixture
def sampled_results():
    with sampling(seed=8, sample_size=2000):
        yield run_models()


@pytest.fixture
def level_result():
    inputs = BernoulliInputs(
        air_density=gaussian(1.0, 0.0),
        velocity_lower=100.0,
        velocity_upper=100.0,
        airfoil_thickness=0.0,
        wing_area=100.0,
        aircraft_mass=0.0,
    )
    return run_model("bernoulli", inputs)


def test_run_model_structure(sampled_results):
    names = [res["model"] for res in sampled_results]
    assert names == ["bernoulli", "lift-equation"]
    bern = sampled_results[0]
    assert [label for label, _, _ in bern["inputs"]] == ["rho", "v1", "v2", "h2-h1", "A", "m"]
    assert [label for label, _, _ in bern["outputs"]] == ["P1 - P2", "F_lift", "F_lift_adjusted"]
    assert isinstance(bern["trend"], ElevationTrend)
    assert 0.0 <= bern["p_climb"] <= 1.0


def test_run_model_unknown_name():
    with pytest.raises(KeyError, match="Unknown model"):
        run_model("vortex-lattice")


def test_level_run_has_zero_climb_probability(level_result):
    assert level_result["trend"] is ElevationTrend.LEVEL
    assert level_result["p_climb"] == 0.0
    for _, _, value in level_result["inputs"]:
        assert value.is_point_mass


def test_results_dataframe(sampled_results):
    df = create_results_dataframe(sampled_results)
    assert list(df.columns) == RESULT_COLUMNS
    assert len(df) == 16
    assert set(df["Role"]) == {"input", "output"}
    wing = df[(df["Model"] == "bernoulli") & (df["Quantity"] == "A")].iloc[0]
    assert wing["Family"] == "empirical"
    assert wing["Samples"] == 26
    assert (df["P05"] <= df["Median"]).all()
    assert (df["Median"] <= df["P95"]).all()


def test_empty_results_dataframe():
    df = create_results_dataframe([])
    assert df.empty
    assert list(df.columns) == RESULT_COLUMNS


def test_summarize_trends(sampled_results, level_result):
    trends = summarize_trends(sampled_results + [level_result])
    assert isinstance(trends, pd.DataFrame)
    assert len(trends) == 3
    assert trends.iloc[2]["Trend"] == "level"
    assert trends.iloc[2]["Mean F_lift_adjusted (N)"] == 0.0
    assert np.isfinite(trends["P(climb)"]).all()


def test_print_report_order(level_result, capsys):
    print_report(level_result)
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "Model using bernoulli's principle",
        "rho (kg/m³) = 1 ± 0",
        "v1 (m/s) = 100 ± 0",
        "v2 (m/s) = 100 ± 0",
        "h2-h1 (m) = 0 ± 0",
        "A (m^2) = 100 ± 0",
        "m (kg) = 0 ± 0",
        "P1 - P2 (N/m^2) = 0 ± 0",
        "F_lift (N) = 0 ± 0",
        "Airplane is not changing elevation level",
        "F_lift subtracting the weight of the airplane (N) = 0 ± 0",
        "Probability of climbing = 0.000",
    ]


def test_run_model_logs_evaluation(caplog):
    caplog.set_level(logging.INFO)
    with sampling(seed=1, sample_size=500):
        run_model("lift-equation")
    assert any("Evaluating lift-equation model" in rec.message for rec in caplog.records)
