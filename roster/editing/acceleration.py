"""Press-and-hold numeric adjustment.

A press applies ``initial_step`` at once. Holding past ``hold_delay``
starts a repeating tick every ``acceleration_interval`` that moves by
``accelerated_step``. With ``snap_to_grid`` the first repeating tick
lands on the next grid line in the direction of travel instead. Every
result is clamped to ``[min_value, max_value]``. Releasing cancels both
timers.
"""

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from roster.game_data import stats

logger = logging.getLogger(__name__)

DEFAULT_HOLD_DELAY = 0.5  # seconds
DEFAULT_ACCELERATION_INTERVAL = 0.1  # seconds


@dataclass(frozen=True)
class AccelerationConfig:
    initial_step: float
    accelerated_step: float
    hold_delay: float = DEFAULT_HOLD_DELAY
    acceleration_interval: float = DEFAULT_ACCELERATION_INTERVAL
    snap_to_grid: bool = False
    grid_size: float = 10


@dataclass(frozen=True)
class AdjusterPreset:
    config: AccelerationConfig
    min_value: float
    max_value: float


# Stats are adjusted in display units (value x 100).
STAT_PRESET = AdjusterPreset(
    AccelerationConfig(initial_step=1, accelerated_step=10, snap_to_grid=True, grid_size=10),
    min_value=stats.MOOD.min * stats.DISPLAY_SCALE,
    max_value=stats.MOOD.max * stats.DISPLAY_SCALE,
)
SELF_ESTEEM_PRESET = AdjusterPreset(
    STAT_PRESET.config,
    min_value=round(stats.SELF_ESTEEM.min * stats.DISPLAY_SCALE),
    max_value=round(stats.SELF_ESTEEM.max * stats.DISPLAY_SCALE),
)
AGE_PRESET = AdjusterPreset(
    AccelerationConfig(initial_step=1, accelerated_step=5, snap_to_grid=True, grid_size=5),
    min_value=stats.AGE_MIN,
    max_value=stats.AGE_MAX,
)


def birth_year_for_age(birth_year: int, age: int, new_age: int) -> int:
    """Birth year that turns ``age`` into ``new_age``."""
    return birth_year - (new_age - age)


class HoldAccelerator:
    """Drives one value through press, hold and release.

    ``on_change`` receives each new value. The accelerator tracks the
    value itself; call ``sync`` when it changes from elsewhere.
    """

    def __init__(
        self,
        value: float,
        on_change: Callable[[float], None],
        config: AccelerationConfig,
        min_value: float = 0,
        max_value: float = 100,
    ):
        self.config = config
        self.min_value = min_value
        self.max_value = max_value
        self._value = value
        self._on_change = on_change
        self._first_tick = True
        self._delay_handle: Optional[asyncio.TimerHandle] = None
        self._repeat_handle: Optional[asyncio.TimerHandle] = None

    @classmethod
    def from_preset(
        cls, preset: AdjusterPreset, value: float, on_change: Callable[[float], None]
    ) -> "HoldAccelerator":
        return cls(value, on_change, preset.config, preset.min_value, preset.max_value)

    @property
    def value(self) -> float:
        return self._value

    @property
    def is_holding(self) -> bool:
        return self._delay_handle is not None or self._repeat_handle is not None

    def sync(self, value: float) -> None:
        self._value = value

    def clamp(self, value: float) -> float:
        return max(self.min_value, min(self.max_value, value))

    def snap(self, value: float, direction: int) -> float:
        """Next grid line from ``value`` in ``direction``."""
        grid = self.config.grid_size
        if direction > 0:
            return value + grid if value % grid == 0 else math.ceil(value / grid) * grid
        return value - grid if value % grid == 0 else math.floor(value / grid) * grid

    def _emit(self, value: float) -> float:
        self._value = self.clamp(value)
        self._on_change(self._value)
        return self._value

    def step(self, direction: int) -> float:
        """One single-step change, as a plain tap would make."""
        sign = 1 if direction > 0 else -1
        return self._emit(self._value + sign * self.config.initial_step)

    def accelerated_tick(self, direction: int) -> float:
        sign = 1 if direction > 0 else -1
        if self._first_tick:
            self._first_tick = False
            if self.config.snap_to_grid:
                return self._emit(self.snap(self._value, sign))
        return self._emit(self._value + sign * self.config.accelerated_step)

    def start_hold(self, direction: int) -> None:
        """Press: step once now, begin accelerating after ``hold_delay``.

        Must be called from inside a running event loop.
        """
        self.stop_hold()
        sign = 1 if direction > 0 else -1
        self.step(sign)
        loop = asyncio.get_running_loop()
        self._delay_handle = loop.call_later(self.config.hold_delay, self._begin_repeat, sign)

    def stop_hold(self) -> None:
        """Release: cancel the pending delay and the repeat, reset the first-tick flag."""
        if self._delay_handle is not None:
            self._delay_handle.cancel()
            self._delay_handle = None
        if self._repeat_handle is not None:
            self._repeat_handle.cancel()
            self._repeat_handle = None
        self._first_tick = True

    def _begin_repeat(self, sign: int) -> None:
        self._delay_handle = None
        self._schedule_repeat(sign)

    def _schedule_repeat(self, sign: int) -> None:
        loop = asyncio.get_running_loop()
        self._repeat_handle = loop.call_later(self.config.acceleration_interval, self._repeat, sign)

    def _repeat(self, sign: int) -> None:
        self.accelerated_tick(sign)
        self._schedule_repeat(sign)
