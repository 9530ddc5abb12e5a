"""
models.py — tick-level software models of filter cores.

Each model holds its ports as attributes (i_reset, i_ce, i_tap_wr, i_tap,
i_sample, o_result and, where the core has one, o_ce) and advances one
clock edge per clock() call, so any of them can stand in for the device
under test behind a ModelAdapter.
"""
from .fixedpoint import mask, sext


class GenericFIR:
    """
    Direct-form FIR with a shift-register tap load.

    delay        -- output pipeline stages, counted in samples
    latency      -- idle clocks between accepting a sample and updating
                    o_result (0: o_result updates on the same edge)
    reset_clears -- False models a core whose data memory survives reset
    result_ce    -- the core advertises o_ce, high on the edge o_result updates
    """

    def __init__(self, ntaps, iw=16, tw=12, ow=40, delay=0, latency=0,
                 reset_clears=True, result_ce=False):
        self.ntaps = ntaps
        self.iw, self.tw, self.ow = iw, tw, ow
        self.delay = delay
        self.latency = latency
        self.reset_clears = reset_clears
        self.result_ce = result_ce

        self.i_reset = 0
        self.i_ce = 0
        self.i_tap_wr = 0
        self.i_tap = 0
        self.i_sample = 0
        self.o_result = 0
        if result_ce:
            self.o_ce = 0

        self.taps = [0]*ntaps
        self.line = [0]*ntaps
        self.pipe = [0]*delay
        self.pending = None
        self.countdown = 0

    def clock(self):
        if self.result_ce:
            self.o_ce = 0

        if self.i_reset:
            self.pending = None
            self.countdown = 0
            if self.reset_clears:
                self.line = [0]*self.ntaps
                self.pipe = [0]*self.delay
                self.o_result = 0
            return

        if self.i_tap_wr:
            self.taps = self.taps[1:] + [sext(self.i_tap, self.tw)]
            return

        if self.i_ce:
            self.line = [sext(self.i_sample, self.iw)] + self.line[:-1]
            acc = sum(h*x for h, x in zip(self.taps, self.line))
            if self.latency == 0:
                self._emit(acc)
            else:
                self.pending = acc
                self.countdown = self.latency
        elif self.countdown > 0:
            self.countdown -= 1
            if self.countdown == 0:
                self._emit(self.pending)
                self.pending = None

    def _emit(self, acc):
        if self.pipe:
            self.pipe.append(acc)
            acc = self.pipe.pop(0)
        self.o_result = mask(acc, self.ow)
        if self.result_ce:
            self.o_ce = 1


class DecimatingFIR:
    """FIR keeping one output in every ndown inputs, strobing o_ce when it does."""

    def __init__(self, ntaps, ndown, iw=16, tw=12, ow=40):
        self.ntaps = ntaps
        self.ndown = ndown
        self.iw, self.tw, self.ow = iw, tw, ow

        self.i_reset = 0
        self.i_ce = 0
        self.i_tap_wr = 0
        self.i_tap = 0
        self.i_sample = 0
        self.o_result = 0
        self.o_ce = 0

        self.taps = [0]*ntaps
        self.line = [0]*ntaps
        self.phase = 0

    def clock(self):
        self.o_ce = 0
        if self.i_reset:
            self.line = [0]*self.ntaps
            self.phase = 0
            self.o_result = 0
        elif self.i_tap_wr:
            self.taps = self.taps[1:] + [sext(self.i_tap, self.tw)]
        elif self.i_ce:
            self.line = [sext(self.i_sample, self.iw)] + self.line[:-1]
            if self.phase == 0:
                acc = sum(h*x for h, x in zip(self.taps, self.line))
                self.o_result = mask(acc, self.ow)
                self.o_ce = 1
            self.phase = (self.phase + 1) % self.ndown
