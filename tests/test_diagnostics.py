import logging

import numpy as np

from madqc.detect.mad import MADDetector
from madqc.utils.diagnostics import batch_table, summarize_batch


def test_batch_table():
    res = MADDetector(3.0).classify_batch([1.0, 2.0, 3.0, 4.0, 100.0])
    tab = batch_table(res)
    assert list(tab.columns) == ["value", "score", "outlier"]
    assert int(tab["outlier"].sum()) == 1
    assert tab.loc[tab["outlier"], "value"].iloc[0] == 100.0


def test_summarize_batch_logs(caplog):
    res = MADDetector(3.0).classify_batch([5.0, 5.0, 5.0, 9.0])
    with caplog.at_level(logging.INFO, logger="madqc"):
        summarize_batch(res)
    assert "Outliers: 1" in caplog.text
    assert "Robust sigma (1.4826 * MAD): 0" in caplog.text
    assert "Degenerate scale" in caplog.text
    assert np.isinf(res.outliers[0].score)


def test_summarize_batch_reports_robust_sigma(caplog):
    res = MADDetector(3.0).classify_batch([1.0, 2.0, 3.0, 4.0, 5.0])
    with caplog.at_level(logging.INFO, logger="madqc"):
        summarize_batch(res)
    assert "Robust sigma (1.4826 * MAD): 1.4826" in caplog.text
