import pytest

from filtertb.config import FilterConfig
from filtertb.engine import FilterTB
from filtertb.models import GenericFIR


def make_tb(ntaps=8, iw=16, tw=12, ow=40, delay=0, model_delay=None,
            ckpce=1, preflush=False, verbose=False, **model_kw):
    if model_delay is None:
        model_delay = delay
    model = GenericFIR(ntaps, iw=iw, tw=tw, ow=ow, delay=model_delay, **model_kw)
    cfg = FilterConfig(iw=iw, ow=ow, tw=tw, ntaps=ntaps, delay=delay,
                       ckpce=ckpce, preflush=preflush, verbose=verbose)
    return FilterTB(model, cfg)


@pytest.fixture
def tb():
    return make_tb()


@pytest.fixture(autouse=True)
def run_in_tmp(tmp_path, monkeypatch):
    # response() dumps filter_tb.dbl into the working directory
    monkeypatch.chdir(tmp_path)
    return tmp_path
