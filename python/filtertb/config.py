"""
config.py — word widths, tap count, latency and capabilities of a DUT.

Defaults match a 16-bit in / 16-bit out, 12-bit tap, 128 tap filter with
two samples of pipeline delay.  Frequency responses are dumped to
filter_tb.dbl unless dump_file is None.
"""

class FilterConfig:
    def __init__(self, iw=16, ow=16, tw=12, ntaps=128, delay=2, ckpce=1,
                 ndown=1, has_result_ce=False, preflush=False,
                 verbose=False, dump_file="filter_tb.dbl"):
        for name, v in (("iw", iw), ("ow", ow), ("tw", tw), ("ndown", ndown)):
            if int(v) < 1:
                raise ValueError(f"{name} must be >= 1, got {v}")
        if int(delay) < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self._watchers = []
        self.iw = int(iw)
        self.ow = int(ow)
        self.tw = int(tw)
        self.ntaps = ntaps
        self.delay = int(delay)
        self.ckpce = max(1, int(ckpce))
        self.ndown = int(ndown)
        # capabilities
        self.has_result_ce = bool(has_result_ce)
        self.preflush = bool(preflush)
        self.verbose = bool(verbose)
        self.dump_file = dump_file

    @property
    def ntaps(self):
        return self._ntaps

    @ntaps.setter
    def ntaps(self, k):
        if int(k) < 1:
            raise ValueError(f"ntaps must be >= 1, got {k}")
        self._ntaps = int(k)
        for fn in self._watchers:
            fn()

    def watch_ntaps(self, fn):
        """Call fn() whenever ntaps is assigned."""
        self._watchers.append(fn)

    def copy(self, **changes):
        kw = dict(iw=self.iw, ow=self.ow, tw=self.tw, ntaps=self.ntaps,
                  delay=self.delay, ckpce=self.ckpce, ndown=self.ndown,
                  has_result_ce=self.has_result_ce, preflush=self.preflush,
                  verbose=self.verbose, dump_file=self.dump_file)
        kw.update(changes)
        return FilterConfig(**kw)

    def __repr__(self):
        return (f"FilterConfig(iw={self.iw}, ow={self.ow}, tw={self.tw}, ntaps={self.ntaps}, "
                f"delay={self.delay}, ckpce={self.ckpce}, ndown={self.ndown})")
