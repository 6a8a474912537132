"""Channel Conduit - spectral primitives and per-channel correction filters
for detector waveforms."""

__version__ = "0.1.0"

# Transform backends
from .dft import DFT, Device, NumpyDFT, TorchDFT, default_device, device, make_dft

# Spectral engine and convolution
from .dsp import (
    check_1d_array,
    convolve,
    fwd,
    fwd_r2c,
    inv,
    inv_c2r,
    regularize_divisor,
    replace,
    replace_length,
)

# Sticky sample mitigation
from .sticky import (
    StickyRange,
    fft_interp_sticky,
    fft_scaling,
    fft_shift_sticky,
    is_sticky_signal_like,
    linear_interp_ranges,
    linear_interp_sticky,
    validate_ranges,
)

# External collaborators
from .components import (
    AnodePlane,
    ChannelNoiseDatabase,
    ComponentRegistry,
    MappedAnodePlane,
    OmniChannelNoiseDB,
)

# Channel filters
from .filters import (
    FILTER_TYPES,
    BatchResult,
    ChannelFilter,
    ChannelMaskMap,
    FilterPipeline,
    OneChannelNoise,
    RelGainCalib,
    StickyCodeMitig,
    build_pipeline,
    create_filter,
)

# Diagnostics
from .diagnostics import (
    PartialCheck,
    calc_rms,
    debug_context,
    is_debug_enabled,
    set_debug_enabled,
)

from .errors import ChanConduitError, ConfigurationError, NumericalError, RangeValidationError

__all__ = [
    "__version__",
    # DFT
    "DFT",
    "NumpyDFT",
    "TorchDFT",
    "make_dft",
    "Device",
    "device",
    "default_device",
    # DSP
    "fwd",
    "inv",
    "fwd_r2c",
    "inv_c2r",
    "convolve",
    "replace",
    "replace_length",
    "regularize_divisor",
    "check_1d_array",
    # Sticky
    "StickyRange",
    "validate_ranges",
    "is_sticky_signal_like",
    "linear_interp_ranges",
    "linear_interp_sticky",
    "fft_interp_sticky",
    "fft_shift_sticky",
    "fft_scaling",
    # Components
    "AnodePlane",
    "MappedAnodePlane",
    "ChannelNoiseDatabase",
    "OmniChannelNoiseDB",
    "ComponentRegistry",
    # Filters
    "ChannelFilter",
    "BatchResult",
    "ChannelMaskMap",
    "StickyCodeMitig",
    "OneChannelNoise",
    "RelGainCalib",
    "FilterPipeline",
    "FILTER_TYPES",
    "create_filter",
    "build_pipeline",
    # Diagnostics
    "calc_rms",
    "PartialCheck",
    "is_debug_enabled",
    "set_debug_enabled",
    "debug_context",
    # Errors
    "ChanConduitError",
    "ConfigurationError",
    "NumericalError",
    "RangeValidationError",
]
