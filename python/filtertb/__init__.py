"""Black-box characterization of clocked, fixed-point filter cores."""
from .config import FilterConfig
from .device import DeviceAdapter, ModelAdapter, PortMap, TraceRecorder
from .engine import CacheState, FilterTB
from .errors import CacheStateError, FilterTBError, MismatchError
from .lowpass import LowpassFigures, characterize_lowpass
from .response import compare_response, ideal_response, load_response, plot_response, write_response

__version__ = "0.1.0"
