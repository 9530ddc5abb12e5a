"""
coeffs.py — reference 12-bit half-band lowpass coefficients.

DCOEFFS is the 127 tap double-precision prototype and ICOEFFS its 107 tap
12-bit rendition.  The symmetric half of ICOEFFS (SYMCOEFFS) and the
non-zero quarter of a half-band (HALFCOEFFS) are what symmetric and
half-band cores actually load; the full filter is recovered with
expand_symmetric() / expand_halfband().
"""
from .fixedpoint import quantize_coeffs

CENTER = 2047

DCOEFFS = [
    -4.565423e-05,  0.000000e+00,  5.807274e-05,  0.000000e+00,
    -9.387644e-05,  0.000000e+00,  1.431971e-04,  0.000000e+00,
    -2.092803e-04,  0.000000e+00,  2.958316e-04,  0.000000e+00,
    -4.070250e-04,  0.000000e+00,  5.475428e-04,  0.000000e+00,
    -7.225928e-04,  0.000000e+00,  9.379540e-04,  0.000000e+00,
    -1.200030e-03,  0.000000e+00,  1.515914e-03,  0.000000e+00,
    -1.893517e-03,  0.000000e+00,  2.341714e-03,  0.000000e+00,
    -2.870587e-03,  0.000000e+00,  3.491778e-03,  0.000000e+00,
    -4.218988e-03,  0.000000e+00,  5.068737e-03,  0.000000e+00,
    -6.061476e-03,  0.000000e+00,  7.223278e-03,  0.000000e+00,
    -8.588452e-03,  0.000000e+00,  1.020368e-02,  0.000000e+00,
    -1.213477e-02,  0.000000e+00,  1.447830e-02,  0.000000e+00,
    -1.738249e-02,  0.000000e+00,  2.108737e-02,  0.000000e+00,
    -2.600886e-02,  0.000000e+00,  3.293482e-02,  0.000000e+00,
    -4.355716e-02,  0.000000e+00,  6.228094e-02,  0.000000e+00,
    -1.052696e-01,  0.000000e+00,  3.180311e-01,  5.000000e-01,
     3.180311e-01,  0.000000e+00, -1.052696e-01,  0.000000e+00,
     6.228094e-02,  0.000000e+00, -4.355716e-02,  0.000000e+00,
     3.293482e-02,  0.000000e+00, -2.600886e-02,  0.000000e+00,
     2.108737e-02,  0.000000e+00, -1.738249e-02,  0.000000e+00,
     1.447830e-02,  0.000000e+00, -1.213477e-02,  0.000000e+00,
     1.020368e-02,  0.000000e+00, -8.588452e-03,  0.000000e+00,
     7.223278e-03,  0.000000e+00, -6.061476e-03,  0.000000e+00,
     5.068737e-03,  0.000000e+00, -4.218988e-03,  0.000000e+00,
     3.491778e-03,  0.000000e+00, -2.870587e-03,  0.000000e+00,
     2.341714e-03,  0.000000e+00, -1.893517e-03,  0.000000e+00,
     1.515914e-03,  0.000000e+00, -1.200030e-03,  0.000000e+00,
     9.379540e-04,  0.000000e+00, -7.225928e-04,  0.000000e+00,
     5.475428e-04,  0.000000e+00, -4.070250e-04,  0.000000e+00,
     2.958316e-04,  0.000000e+00, -2.092803e-04,  0.000000e+00,
     1.431971e-04,  0.000000e+00, -9.387644e-05,  0.000000e+00,
     5.807274e-05,  0.000000e+00, -4.565423e-05
]

ICOEFFS = [
       1,     0,    -1,     0,     2,     0,    -2,     0,
       3,     0,    -4,     0,     6,     0,    -7,     0,
       9,     0,   -11,     0,    14,     0,   -17,     0,
      20,     0,   -24,     0,    29,     0,   -35,     0,
      41,     0,   -49,     0,    59,     0,   -71,     0,
      86,     0,  -106,     0,   134,     0,  -178,     0,
     254,     0,  -430,     0,  1302,  2047,  1302,     0,
    -430,     0,   254,     0,  -178,     0,   134,     0,
    -106,     0,    86,     0,   -71,     0,    59,     0,
     -49,     0,    41,     0,   -35,     0,    29,     0,
     -24,     0,    20,     0,   -17,     0,    14,     0,
     -11,     0,     9,     0,    -7,     0,     6,     0,
      -4,     0,     3,     0,    -2,     0,     2,     0,
      -1,     0,     1
]

SYMCOEFFS = ICOEFFS[:53]

HALFCOEFFS = [
       1,    -1,     2,    -2,     3,    -4,     6,    -7,
       9,   -11,    14,   -17,    20,   -24,    29,   -35,
      41,   -49,    59,   -71,    86,  -106,   134,  -178,
     254,  -430,  1302
]

def prototype_taps(h=DCOEFFS, center=CENTER):
    """Quantise a prototype so its largest tap lands on center."""
    return quantize_coeffs(h, center / max(abs(v) for v in h)).tolist()

def expand_symmetric(half, center):
    return list(half) + [center] + list(reversed(half))

def expand_halfband(quarter, center):
    half = []
    for c in quarter:
        half += [c, 0]
    # the tap next to the center is the last non-zero one
    half = half[:-1]
    return expand_symmetric(half, center)
