import os

import numpy as np
import pytest

from conftest import make_tb
from filtertb.errors import MismatchError
from filtertb.fixedpoint import maxval
from filtertb.response import (bin_freqs, compare_response, ideal_response, load_response,
                               plot_response, to_db)

NTAPS = 12


@pytest.fixture
def taps():
    rng = np.random.default_rng(2024)
    return rng.integers(-2048, 2048, NTAPS).tolist()


def loaded_tb(taps, **kw):
    tb = make_tb(ntaps=len(taps), **kw)
    tb.testload(taps)
    return tb


def test_bin_freqs():
    assert bin_freqs(4).tolist() == [0.0, 0.125, 0.25, 0.375]


def test_dc_is_tap_sum(taps):
    tb = loaded_tb(taps)
    rvec = tb.response(4)
    assert rvec[0].real == pytest.approx(sum(taps), abs=1e-9)
    assert rvec[0].imag == 0.0


@pytest.mark.parametrize("mag", [1.0, 0.5])
def test_matches_ideal_response(taps, mag):
    tb = loaded_tb(taps)
    nfreq = 16
    rvec = tb.response(nfreq, mag=mag)
    ideal = ideal_response(taps, nfreq, center=(NTAPS-1)/2)
    # probes are rounded to the nearest integer: at most half an LSB per sample
    tol = sum(abs(t) for t in taps) / (mag*maxval(16))
    compare_response(rvec, ideal, tol)


def test_pipeline_delay_does_not_change_response(taps):
    direct = loaded_tb(taps).response(8)
    delayed = loaded_tb(taps, delay=3).response(8)
    assert np.array_equal(direct, delayed)


def test_symmetric_taps_are_real():
    taps = [1, -3, 9, 20, 9, -3, 1]
    ideal = ideal_response(taps, 32, center=3)
    assert np.allclose(ideal.imag, 0.0, atol=1e-9)
    assert ideal[0].real == pytest.approx(sum(taps))


def test_dump_round_trip(taps, tmp_path):
    tb = loaded_tb(taps)
    fname = tmp_path / "custom.dbl"
    tb.record_results(fname)
    rvec = tb.response(8)
    assert os.path.getsize(fname) == 8*16
    assert np.array_equal(load_response(fname), rvec)

    other = tmp_path / "other.dbl"
    tb.response(3, fname=other)
    assert len(load_response(other)) == 3


def test_default_dump_in_working_directory(taps, tmp_path):
    tb = loaded_tb(taps)
    rvec = tb.response(4)
    assert os.listdir(tmp_path) == ["filter_tb.dbl"]
    assert np.array_equal(load_response("filter_tb.dbl"), rvec)

    # every run rewrites it
    rvec = tb.response(6, mag=0.5)
    assert np.array_equal(load_response("filter_tb.dbl"), rvec)


def test_dump_disabled(taps, tmp_path):
    tb = loaded_tb(taps)
    tb.record_results(None)
    tb.response(4)
    assert os.listdir(tmp_path) == []


def test_missing_dump(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_response(tmp_path / "none.dbl")


def test_compare_response_flags_mismatch(capsys):
    ideal = np.array([1.0, 0.5, 0.25], dtype=complex)
    measured = ideal.copy()
    measured[2] += 0.1
    with pytest.raises(MismatchError):
        compare_response(measured, ideal, 0.01)
    assert "RSP[   2]" in capsys.readouterr().out
    assert compare_response(ideal, ideal, 0.0) == 0.0
    with pytest.raises(ValueError):
        compare_response(ideal[:2], ideal, 0.1)


def test_to_db():
    assert to_db(np.array([1.0, 10.0])).tolist() == pytest.approx([0.0, 20.0])


def test_plot_response(taps, tmp_path):
    rvec = ideal_response(taps, 32)
    fname = tmp_path / "response.png"
    plot_response(rvec, fname, ideal=rvec)
    assert fname.exists()
