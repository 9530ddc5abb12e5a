import pytest

from filtertb.device import ModelAdapter, PortMap, TraceRecorder
from filtertb.models import GenericFIR


class Counter:
    def __init__(self):
        self.din = 0
        self.count = 0

    def clock(self):
        self.count += self.din


def test_writes_wait_for_tick():
    model = GenericFIR(2)
    dev = ModelAdapter(model)
    dev.write("sample", 5)
    assert model.i_sample == 0
    dev.tick()
    assert model.i_sample == 5
    assert dev.tickcount == 1


def test_result_visible_after_tick():
    model = GenericFIR(1, tw=4)
    model.taps = [3]
    dev = ModelAdapter(model)
    dev.write("sample", 7)
    dev.write("ce", 1)
    assert dev.read("result") == 0
    dev.tick()
    assert dev.read("result") == 21


def test_has_port():
    assert not ModelAdapter(GenericFIR(2)).has_port("result_ce")
    assert ModelAdapter(GenericFIR(2, result_ce=True)).has_port("result_ce")
    assert not ModelAdapter(GenericFIR(2)).has_port("bogus")


def test_unknown_port():
    dev = ModelAdapter(GenericFIR(2))
    with pytest.raises(KeyError):
        dev.write("bogus", 1)


def test_custom_port_map():
    model = Counter()
    dev = ModelAdapter(model, ports={"sample": "din", "result": "count"})
    dev.write("sample", 2)
    dev.tick()
    dev.tick()
    assert dev.read("result") == 4


def test_port_map_defaults_and_overrides():
    ports = PortMap({"result": "dout"})
    assert ports["sample"] == "i_sample"
    assert ports["result"] == "dout"
    assert "tap_wr" in ports and "bogus" not in ports
    with pytest.raises(KeyError):
        ports["bogus"]

    model = Counter()
    dev = ModelAdapter(model, ports=PortMap({"sample": "din", "result": "count"}))
    dev.write("sample", 3)
    dev.tick()
    assert dev.read("result") == 3


def test_trace_sink():
    dev = ModelAdapter(GenericFIR(2))
    trace = TraceRecorder()
    dev.open_trace(trace)
    dev.write("sample", 9)
    for _ in range(3):
        dev.tick()
    assert [t for t, _ in trace.samples] == [1, 2, 3]
    assert trace.column("sample") == [9, 9, 9]
    dev.close_trace()
    assert trace.closed
    assert dev.trace is None
    dev.tick()
    assert len(trace.samples) == 3


def test_bench_closes_trace_on_exit():
    from filtertb.engine import FilterTB
    trace = TraceRecorder()
    with FilterTB(GenericFIR(2)) as tb:
        tb.opentrace(trace)
        tb.reset()
    assert trace.closed
