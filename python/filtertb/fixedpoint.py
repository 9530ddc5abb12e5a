"""
fixedpoint.py — two's complement helpers shared by the bench.

Masking, sign extension, coefficient quantisation and the integer
reference convolution used to cross-check a device's output.
"""
import numpy as np

def mask(v, nbits):
    """Keep the low nbits of v (unsigned truncation)."""
    return int(v) & ((1 << nbits) - 1)

def sext(v, nbits):
    """Interpret the low nbits of v as a two's complement number."""
    v = int(v) + (1 << (nbits - 1))
    v &= (1 << nbits) - 1
    return v - (1 << (nbits - 1))

def nextlg(v):
    """Smallest power of two >= v (1 for v <= 1)."""
    r = 1
    while r < v:
        r <<= 1
    return r

def maxval(nbits):
    return (1 << (nbits - 1)) - 1

def minval(nbits):
    return -(1 << (nbits - 1))

def quantize_coeffs(h, scale):
    return np.round(np.asarray(h, dtype=float) * scale).astype(np.int64)

def convolve_int(x, h):
    """Causal integer convolution y[k] = sum_v x[k-v]*h[v], truncated to len(x)."""
    y = np.convolve(np.asarray(x, dtype=np.int64), np.asarray(h, dtype=np.int64))
    return y[:len(x)].tolist()
