"""
lowpass.py — passband / stopband figures from a magnitude-squared curve.

The edge and ripple detection is a heuristic tuned for single-transition
lowpass filters: the band split is taken at the first bin below a quarter
of the DC power, passband ripple is the deepest local minimum below that
split, and the stopband level is the highest rising peak above it.
Multi-band or non-monotone responses may be misclassified.
"""
from collections import namedtuple
import math
import numpy as np

LowpassFigures = namedtuple("LowpassFigures", ["fp", "fs", "depth", "ripple"])

def characterize_lowpass(magv, verbose=False):
    """
    magv[k] is |H|^2 at normalized frequency k/len(magv)/2.
    Returns LowpassFigures with fp, fs in cycles/sample, depth in dB
    relative to DC and ripple as a peak-to-peak over mean ratio.
    """
    magv = np.asarray(magv, dtype=float)
    nlen = len(magv)
    if nlen < 2:
        raise ValueError("need at least two frequency bins")
    dc = magv[0]
    if dc <= 0:
        raise ValueError("response has no DC gain, not a lowpass filter")

    midcut = nlen - 1
    for k in range(nlen):
        if magv[k] < 0.25 * dc:
            midcut = k
            break

    maxpass = dc
    minpass = dc
    for k in range(midcut, -1, -1):
        if magv[k] > maxpass:
            maxpass = magv[k]

    passband_ripple = False
    for k in range(midcut, -1, -1):
        if k + 1 < nlen and magv[k] < minpass and magv[k+1] > magv[k]:
            minpass = magv[k]
            passband_ripple = True
    if not passband_ripple:
        minpass = maxpass / math.sqrt(2.0)

    fp = 0
    for k in range(midcut, -1, -1):
        if magv[k] > minpass:
            fp = k
            break

    maxstop = abs(magv[nlen-1])
    for k in range(max(midcut, 1), nlen):
        if abs(magv[k]) > abs(magv[k-1]) and abs(magv[k]) > maxstop:
            maxstop = abs(magv[k])

    fs = nlen - 1
    for k in range(midcut, nlen):
        if magv[k] <= maxstop:
            fs = k
            break

    if verbose:
        print(f"MAXPASS= {maxpass:f}")
        print(f"MINPASS= {minpass:f}")
        print(f"FP     = {fp:f}")
        print(f"FS     = {fs:f}")
        print(f"DC     = {dc:f}")
        print("--------")

    ripple = 2.0 * (maxpass - minpass) / (maxpass + minpass)
    depth = 10.0 * math.log10(maxstop / dc) if maxstop > 0 else -math.inf
    return LowpassFigures(fp / nlen / 2.0, fs / nlen / 2.0, depth, ripple)

def report(fig):
    print(f"FP     = {fig.fp:f}")
    print(f"FS     = {fig.fs:f}")
    print(f"DEPTH  = {fig.depth:6.2f} dB")
    print(f"RIPPLE = {fig.ripple:.2g}")
