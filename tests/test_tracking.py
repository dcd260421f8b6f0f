import sys

from tapatan import tracking


def test_disabled_tracking_is_a_no_op(tmp_path):
    with tracking.maybe_mlflow_run(False, run_name="match", log_dir=tmp_path) as active:
        assert active is False
        tracking.log_params({"x": "easy"})
        tracking.log_metrics({"X": 1.0})
    assert not (tmp_path / "mlruns").exists()


def test_missing_mlflow_continues_without_tracking(monkeypatch, tmp_path):
    monkeypatch.setitem(sys.modules, "mlflow", None)
    with tracking.maybe_mlflow_run(True, run_name="match", log_dir=tmp_path) as active:
        assert active is False
        tracking.log_params({"x": "easy"})
