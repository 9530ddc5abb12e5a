"""
device.py — the clocked device under test, as seen by the bench.

The bench only ever needs three things from a DUT: write a named port,
read a named port, and advance one clock edge.  Writes are held until the
next tick() so that everything written between two ticks is seen by the
device on the same edge.
"""

# logical port name -> signal name on the device
DEFAULT_PORTS = {
    "sample":    "i_sample",
    "tap":       "i_tap",
    "ce":        "i_ce",
    "tap_wr":    "i_tap_wr",
    "reset":     "i_reset",
    "result":    "o_result",
    "result_ce": "o_ce",
}


class PortMap:
    """Logical port name -> signal name, starting from DEFAULT_PORTS."""

    def __init__(self, overrides=None):
        self.names = dict(DEFAULT_PORTS)
        if overrides:
            self.names.update(overrides)

    def __getitem__(self, port):
        try:
            return self.names[port]
        except KeyError:
            raise KeyError(f"unknown port '{port}'") from None

    def __contains__(self, port):
        return port in self.names

    def items(self):
        return self.names.items()


class DeviceAdapter:
    """Interface every DUT wrapper provides."""

    def write(self, port, value):
        raise NotImplementedError

    def read(self, port):
        raise NotImplementedError

    def has_port(self, port):
        raise NotImplementedError

    def tick(self):
        raise NotImplementedError

    def open_trace(self, sink):
        raise NotImplementedError

    def close_trace(self):
        raise NotImplementedError


class ModelAdapter(DeviceAdapter):
    """
    Wrap a Python tick-level model.

    The model keeps its signals as plain attributes and exposes clock(),
    which advances its state by one rising edge.
    """

    def __init__(self, model, ports=None):
        self.model = model
        self.ports = ports if isinstance(ports, PortMap) else PortMap(ports)
        self.pending = {}
        self.tickcount = 0
        self.trace = None

    def _signal(self, port):
        return self.ports[port]

    def has_port(self, port):
        return port in self.ports and hasattr(self.model, self.ports[port])

    def write(self, port, value):
        self.pending[self._signal(port)] = int(value)

    def read(self, port):
        return int(getattr(self.model, self._signal(port)))

    def tick(self):
        for name, v in self.pending.items():
            setattr(self.model, name, v)
        self.pending.clear()
        self.model.clock()
        self.tickcount += 1
        if self.trace is not None:
            self.trace.sample(self.tickcount, self.snapshot())

    def snapshot(self):
        return {p: int(getattr(self.model, s)) for p, s in self.ports.items()
                if hasattr(self.model, s)}

    def open_trace(self, sink):
        self.close_trace()
        self.trace = sink

    def close_trace(self):
        if self.trace is not None:
            self.trace.close()
            self.trace = None


class TraceRecorder:
    """In-memory trace sink: one (tick, {port: value}) entry per clock."""

    def __init__(self):
        self.samples = []
        self.closed = False

    def sample(self, t, values):
        self.samples.append((t, values))

    def close(self):
        self.closed = True

    def column(self, port):
        return [v.get(port) for _, v in self.samples]
