"""
engine.py — generic testbench for clocked, fixed-point filter cores.

FilterTB drives a DeviceAdapter one sample at a time and layers the
standard measurements on top of that:

    apply / test      stream a vector through the core
    load / testload   write taps, check they read back as the impulse response
    tb[k]             impulse response, computed once per tap load
    test_overflow     worst case amplitude check against integer convolution
    response          frequency response, one coherent probe per bin
    measure_lowpass   passband / stopband figures from that response

Capabilities of the core (several clocks per sample, a result strobe,
decimation, memory that survives reset) come from the FilterConfig.
"""
from enum import Enum
import math
import numpy as np

from .config import FilterConfig
from .device import DeviceAdapter, ModelAdapter
from .errors import CacheStateError, MismatchError
from .fixedpoint import mask, sext, nextlg, maxval
from .lowpass import characterize_lowpass, report
from .response import write_response


class CacheState(Enum):
    EMPTY = 0
    COMPUTING = 1
    VALID = 2


class FilterTB:
    def __init__(self, device, config=None):
        if not isinstance(device, DeviceAdapter):
            device = ModelAdapter(device)
        self.dev = device
        self._config = config if config is not None else FilterConfig()
        self._hk = None
        self._hk_state = CacheState.EMPTY
        self._config.watch_ntaps(self.clear_cache)

    @property
    def config(self):
        return self._config

    # ---------- configuration ----------
    @property
    def IW(self): return self.config.iw
    @IW.setter
    def IW(self, k): self.config.iw = int(k)

    @property
    def OW(self): return self.config.ow
    @OW.setter
    def OW(self, k): self.config.ow = int(k)

    @property
    def TW(self): return self.config.tw
    @TW.setter
    def TW(self, k): self.config.tw = int(k)

    @property
    def DELAY(self): return self.config.delay
    @DELAY.setter
    def DELAY(self, k): self.config.delay = int(k)

    @property
    def NTAPS(self): return self.config.ntaps
    @NTAPS.setter
    def NTAPS(self, k): self.config.ntaps = k

    @property
    def CKPCE(self): return self.config.ckpce
    @CKPCE.setter
    def CKPCE(self, k): self.config.ckpce = max(1, int(k))

    @property
    def NDOWN(self): return self.config.ndown
    @NDOWN.setter
    def NDOWN(self, k): self.config.ndown = int(k)

    @property
    def has_result_ce(self):
        return self.config.has_result_ce or self.dev.has_port("result_ce")

    @property
    def cache_state(self):
        return self._hk_state

    # ---------- clocking ----------
    def tick(self):
        self.dev.tick()

    def reset(self):
        dev = self.dev
        dev.write("tap", 0)
        dev.write("sample", 0)
        dev.write("ce", 0)
        dev.write("tap_wr", 0)
        dev.write("reset", 1)
        self.tick()
        dev.write("reset", 0)

    def opentrace(self, sink):
        self.dev.open_trace(sink)

    def close(self):
        self.dev.close_trace()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # ---------- vector application ----------
    def apply(self, samples):
        """
        Feed samples to the core without resetting it.  Returns one result
        per sample, or one per result strobe when the core decimates.
        """
        dev = self.dev
        iw, ow, ckpce = self.IW, self.OW, self.CKPCE
        strobe = self.has_result_ce
        decimating = self.NDOWN > 1
        if decimating and not strobe:
            raise ValueError("a decimating core needs a result clock enable")

        dev.write("reset", 0)
        dev.write("tap_wr", 0)
        out = []
        for s in samples:
            dev.write("sample", mask(s, iw))
            dev.write("ce", 1)
            self.tick()

            v = None
            if not decimating or dev.read("result_ce"):
                v = dev.read("result")

            if ckpce > 1:
                dev.write("ce", 0)
                for _ in range(ckpce-1):
                    self.tick()
                    if strobe and dev.read("result_ce"):
                        v = dev.read("result")

            if v is not None:
                out.append(sext(v, ow))
        dev.write("ce", 0)
        return out

    def test(self, samples):
        """
        Reset the core, then apply samples followed by DELAY samples of
        zeros.  Results come back aligned with the inputs causing them.
        """
        n = len(samples)
        if n <= 0:
            raise ValueError("test vector must not be empty")
        if self.config.preflush:
            self.clear_filter()
        self.reset()

        ndown = self.NDOWN
        data = [int(v) for v in samples] + [0]*(self.DELAY*ndown)
        out = self.apply(data)
        nout = n if ndown == 1 else -(-n // ndown)
        if self.config.verbose:
            for i, v in enumerate(out[:self.DELAY]):
                print(f"{i:3d}, {self.DELAY:3d}, {n} : Discard : {v}")
        return out[self.DELAY:self.DELAY + nout]

    def clear_filter(self):
        """
        Flush data memory that reset doesn't clear: nextlg(NTAPS) enabled
        clocks of zeros, then CKPCE idle clocks.
        """
        dev = self.dev
        dev.write("tap_wr", 0)
        dev.write("ce", 1)
        dev.write("sample", 0)
        for _ in range(nextlg(self.NTAPS)):
            self.tick()
        dev.write("ce", 0)
        for _ in range(self.CKPCE):
            self.tick()

    # ---------- taps ----------
    def load(self, taps):
        dev = self.dev
        if self.config.preflush:
            self.reset()
        dev.write("reset", 0)
        dev.write("ce", 0)
        dev.write("tap_wr", 1)
        for t in taps:
            dev.write("tap", mask(t, self.TW))
            self.tick()
        dev.write("tap_wr", 0)
        self.clear_cache()

    def expected_impulse(self, taps):
        """Impulse response a core should show after load(taps)."""
        hk = [int(t) for t in taps][:2*self.NTAPS]
        return hk + [0]*(2*self.NTAPS - len(hk))

    def testload(self, taps):
        self.load(taps)
        self.reset()

        expected = self.expected_impulse(taps)
        for k in range(2*self.NTAPS):
            m = self[k]
            if expected[k] != m:
                print(f"Data[{k}] = {expected[k]} != tb[{k}] = {m}")
                raise MismatchError(f"impulse response mismatch at tap {k}")

    # ---------- impulse response ----------
    def clear_cache(self):
        self._hk = None
        self._hk_state = CacheState.EMPTY

    def __getitem__(self, tap):
        if tap < 0 or tap >= 2*self.NTAPS:
            return 0
        if self._hk_state is CacheState.COMPUTING:
            raise CacheStateError("impulse response read while it is being measured")
        if self._hk_state is CacheState.EMPTY:
            self._measure_impulse()
        return self._hk[tap]

    def _measure_impulse(self):
        if self.NDOWN > 1:
            raise ValueError("impulse response readback needs a 1:1 rate core")
        nlen = 2*self.NTAPS
        shift = self.IW - 1
        vec = [0]*nlen
        vec[0] = -(1 << shift)

        self._hk_state = CacheState.COMPUTING
        try:
            out = self.test(vec)
        except BaseException:
            self._hk_state = CacheState.EMPTY
            raise
        self._hk = [-(v >> shift) for v in out]
        self._hk_state = CacheState.VALID

    def impulse_response(self):
        return [self[k] for k in range(2*self.NTAPS)]

    # ---------- overflow ----------
    def test_overflow(self, nlen=None):
        """
        Drive the input that adds every tap constructively and compare the
        result against the integer convolution of the impulse response.
        Raises MismatchError on any difference; returns False if no output
        actually reached full constructive interference, which is always
        the case for a vector shorter than NTAPS.
        """
        if self.NDOWN > 1:
            raise ValueError("overflow test needs a 1:1 rate core")
        ntaps = self.NTAPS
        if nlen is None:
            nlen = 2*ntaps
        maxv = maxval(self.IW)
        if self.config.verbose:
            print("TESTING-BIBO")

        hk = [self[v] for v in range(ntaps)]
        data = [-maxv if self[ntaps-1-k] < 0 else maxv for k in range(nlen)]
        out = self.test(data)

        tested = False
        for k in range(nlen):
            acc = 0
            full = True
            for v in range(ntaps):
                if k - v >= 0:
                    term = data[k-v] * hk[v]
                    acc += term
                    if term < 0:
                        full = False
                else:
                    full = False
            if full:
                tested = True
            if out[k] != acc:
                print(f"OUT[{k:3d}] = {out[k]:12d} != expected {acc:12d}")
                raise MismatchError(f"overflow test mismatch at output {k}")
        return tested

    # ---------- frequency response ----------
    def record_results(self, fname):
        self.config.dump_file = fname

    def response(self, nfreq, mag=1.0, fname=None):
        """
        Complex gain at nfreq bins from DC up to Nyquist.  Each bin is probed
        with an NTAPS long cosine (and, above DC, a sine) whose zero phase
        sits on the center sample; the last output over the amplitude is
        the real (imaginary) part of the gain.
        """
        ntaps = self.NTAPS
        amp = mag * maxval(self.IW)
        jj = np.arange(ntaps) - (ntaps - 1) / 2.0
        rvec = np.zeros(nfreq, dtype=np.complex128)

        for i in range(nfreq):
            theta = 2.0 * math.pi * i / nfreq / 2.0 * jj

            probe = np.rint(amp * np.cos(theta)).astype(np.int64)
            re = self.test(probe.tolist())[-1] / amp

            im = 0.0
            if i > 0:
                probe = np.rint(amp * np.sin(theta)).astype(np.int64)
                im = self.test(probe.tolist())[-1] / amp

            rvec[i] = complex(re, im)
            if self.config.verbose:
                print(f"RSP[{i:4d} / {nfreq:4d}] = {re:10.1f} + {im:10.1f}")

        fname = fname if fname is not None else self.config.dump_file
        if fname is not None:
            write_response(fname, rvec)
        return rvec

    def measure_lowpass(self):
        nlen = 16*self.NTAPS
        rvec = self.response(nlen)
        fig = characterize_lowpass(np.abs(rvec)**2, verbose=self.config.verbose)
        if self.config.verbose:
            report(fig)
        return fig
