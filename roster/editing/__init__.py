"""Edit timing: debounced persistence, press-and-hold acceleration, value stepping."""

from roster.editing.acceleration import AccelerationConfig, HoldAccelerator
from roster.editing.coalescer import EditCoalescer

__all__ = ["AccelerationConfig", "EditCoalescer", "HoldAccelerator"]
