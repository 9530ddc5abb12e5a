"""
response.py — frequency response dumps, ideal responses and plots.

Bin i of an nfreq point response sits at normalized frequency
i / nfreq / 2 cycles/sample.  Dumps are flat binary files of complex
doubles (real, imaginary) in bin order.
"""
from pathlib import Path
import math
import numpy as np
from scipy import signal
import matplotlib.pyplot as plt

from .errors import MismatchError

def bin_freqs(nfreq):
    return np.arange(nfreq) / nfreq / 2.0

def write_response(fname, rvec):
    np.asarray(rvec, dtype=np.complex128).tofile(str(fname))

def load_response(fname):
    p = Path(fname)
    if not p.exists():
        raise FileNotFoundError(fname)
    return np.fromfile(str(p), dtype=np.complex128)

def ideal_response(taps, nfreq, center=None):
    """
    DTFT of the integer taps on the bench's frequency grid.  With center
    set, the phase is referenced to that sample, which is how the bench's
    probes are aligned (center = (NTAPS-1)/2).
    """
    freqs = bin_freqs(nfreq)
    _, H = signal.freqz(np.asarray(taps, dtype=float), 1.0, worN=freqs, fs=1.0)
    if center is not None:
        H = H * np.exp(2j * math.pi * freqs * center)
    return H

def to_db(rvec):
    return 20*np.log10(np.abs(rvec) + 1e-20)

def compare_response(measured, ideal, tol):
    measured = np.asarray(measured); ideal = np.asarray(ideal)
    if len(measured) != len(ideal):
        raise ValueError(f"length mismatch: {len(measured)} != {len(ideal)}")
    err = np.abs(measured - ideal)
    bad = np.nonzero(err > tol)[0]
    if bad.size:
        k = int(bad[0])
        print(f"RSP[{k:4d}] = {measured[k]:.4f} != ideal {ideal[k]:.4f} (err {err[k]:.3g} > tol {tol:.3g})")
        print(f"Total mismatches: {bad.size} / {len(measured)}")
        raise MismatchError(f"response bin {k} off by {err[k]:.3g}")
    return float(err.max()) if err.size else 0.0

def plot_response(rvec, fname, ideal=None, title="Measured frequency response"):
    freqs = bin_freqs(len(rvec))
    plt.figure(figsize=(9,4))
    plt.plot(freqs, to_db(rvec), label='Measured', linewidth=0.8)
    if ideal is not None:
        plt.plot(freqs, to_db(ideal), label='Ideal (taps)', linewidth=0.6, alpha=0.9)
    plt.xlabel("Normalized frequency (cycles/sample)")
    plt.ylabel("Magnitude (dB)")
    plt.title(title)
    plt.xlim(0, 0.5)
    plt.legend(fontsize='small')
    plt.grid(True, linestyle=':', alpha=0.4)
    plt.tight_layout(); plt.savefig(str(fname), dpi=200)
    plt.close()
    print(f"Wrote {fname}")
