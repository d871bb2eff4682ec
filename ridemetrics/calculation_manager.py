"""
Calculation Manager.

Computes the current value of registered fields from live state and runs a
periodic tick that recomputes the active fields (subscribed or displayed)
and pushes the results to listeners and display surfaces.

Field computations are synchronous. A tick that is still running when the
next one is due causes that slot to be skipped, never queued.
"""
import logging
import math
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Iterable, List, Optional

from .calculations.aggregation import latest_value
from .calculations.zones import ZoneColor
from .config import Config
from .domain import ConnectionsState, MeasurementsState, UserSettings, WorkoutState, now_ms
from .fields.base import CalculationContext, FieldDefinition
from .fields.registry import FieldRegistry
from .monitoring import PerformanceMonitor

logger = logging.getLogger(__name__)

FieldUpdateCallback = Callable[[str, Optional[float]], None]


class DisplaySurface(ABC):
    """A consumer of formatted field values (a screen, a widget, a log sink)."""

    @property
    @abstractmethod
    def field_ids(self) -> Iterable[str]:
        """Ids of the fields currently shown."""

    @abstractmethod
    def update(
        self,
        field_id: str,
        value: Optional[float],
        formatted: str,
        color: Optional[ZoneColor] = None,
    ) -> None:
        """Receive the latest value of one field with its zone colours, if any."""


class CalculationManager:
    """Live field computation and tick scheduling.

    Usage:
        manager = CalculationManager(registry, measurements, workout_state, settings, connections)
        unsubscribe = manager.on_update(lambda field_id, value: print(field_id, value))
        manager.subscribe("power-3s", handler)
        manager.start()
        ...
        manager.stop()
    """

    def __init__(
        self,
        registry: FieldRegistry,
        measurements: Optional[MeasurementsState] = None,
        workout_state: Optional[WorkoutState] = None,
        settings: Optional[UserSettings] = None,
        connections: Optional[ConnectionsState] = None,
        interval_ms: Optional[float] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.registry = registry
        self.measurements = measurements or MeasurementsState()
        self.workout_state = workout_state or WorkoutState()
        self.settings = (settings or UserSettings()).validate()
        self.connections = connections or ConnectionsState()
        self.interval_ms = float(interval_ms or Config.TICK_INTERVAL_MS)
        self._clock = clock or now_ms

        self._values: Dict[str, Optional[float]] = {}
        self._listeners: List[FieldUpdateCallback] = []
        self._subscribers: Dict[str, List[FieldUpdateCallback]] = {}
        self._displays: List[DisplaySurface] = []
        self._lock = threading.RLock()          # listeners, subscribers, displays, values
        self._tick_lock = threading.Lock()      # held for the duration of one tick

        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._paused = False

        self.tick_count = 0
        self.skipped_ticks = 0
        slow_ms = Config.SLOW_TICK_WARNING_MS if interval_ms is None else self.interval_ms
        self.monitor = PerformanceMonitor(slow_threshold_ms=slow_ms)

    # ------------------------------------------------------------------
    # State updates
    # ------------------------------------------------------------------

    def update_measurements(self, measurements: MeasurementsState) -> None:
        self.measurements = measurements

    def update_workout_state(self, workout_state: WorkoutState) -> None:
        self.workout_state = workout_state

    def update_connections(self, connections: ConnectionsState) -> None:
        self.connections = connections

    def update_settings(self, settings: UserSettings) -> None:
        """Swap the settings snapshot; raises ZoneConfigError for a broken zone table."""
        self.settings = settings.validate()

    # ------------------------------------------------------------------
    # Computation
    # ------------------------------------------------------------------

    def _context(self, now: Optional[int] = None) -> CalculationContext:
        return CalculationContext(
            measurements=self.measurements,
            workout=self.workout_state,
            settings=self.settings,
            connections=self.connections,
            now=self._clock() if now is None else now,
        )

    def preconditions_met(self, definition: FieldDefinition) -> bool:
        """Sensor, GPS and workout requirements against the current snapshots."""
        for sensor in definition.requires_sensor:
            if not self.connections.is_connected(sensor):
                return False
        if definition.requires_gps and not self.connections.is_connected("gps"):
            return False
        if definition.requires_workout_active and not self.workout_state.is_active:
            return False
        return True

    def _compute(self, definition: FieldDefinition, ctx: CalculationContext) -> Optional[float]:
        if not self.preconditions_met(definition):
            return None

        try:
            if definition.calculator is not None:
                value = definition.calculator(ctx)
            elif definition.sensor_channel:
                value = latest_value(ctx.stream(definition.sensor_channel), now=ctx.now)
            else:
                value = None
        except Exception as e:
            logger.warning(f"Calculator for field '{definition.id}' failed: {e}")
            return None

        if value is None:
            return None
        value = float(value)
        if math.isnan(value):
            return None
        if not definition.in_range(value):
            logger.debug(f"Field '{definition.id}' value {value} outside valid range, discarded")
            return None
        return value

    def calculate_field(self, field_id: str, now: Optional[int] = None) -> Optional[float]:
        """Current value of a field, or None when unknown, unavailable or invalid."""
        definition = self.registry.get(field_id)
        if definition is None:
            return None
        value = self._compute(definition, self._context(now))
        with self._lock:
            self._values[field_id] = value
        return value

    def calculate_all(self, now: Optional[int] = None) -> Dict[str, Optional[float]]:
        """Recompute every registered field."""
        ctx = self._context(now)
        results = {d.id: self._compute(d, ctx) for d in self.registry.all_fields()}
        with self._lock:
            self._values.update(results)
        return results

    def get_value(self, field_id: str) -> Optional[float]:
        """Last computed value (None if never computed)."""
        with self._lock:
            return self._values.get(field_id)

    def field_color(self, field_id: str) -> Optional[ZoneColor]:
        """Zone colours for the last computed value of a field."""
        definition = self.registry.get(field_id)
        if definition is None:
            return None
        return self._color(definition, self.get_value(field_id))

    def _color(self, definition: FieldDefinition, value: Optional[float]) -> Optional[ZoneColor]:
        try:
            return definition.color(value, self.settings)
        except Exception as e:
            logger.warning(f"Colorizer for field '{definition.id}' failed: {e}")
            return None

    def get_values(self, field_ids: Iterable[str]) -> Dict[str, Optional[float]]:
        with self._lock:
            return {field_id: self._values.get(field_id) for field_id in field_ids}

    def get_all_values(self) -> Dict[str, Optional[float]]:
        with self._lock:
            return dict(self._values)

    # ------------------------------------------------------------------
    # Listeners & displays
    # ------------------------------------------------------------------

    def on_update(self, callback: FieldUpdateCallback) -> Callable[[], None]:
        """Register a listener called as `callback(field_id, value)` for every active field each tick.

        Returns:
            Function that removes the listener
        """
        with self._lock:
            self._listeners.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return unsubscribe

    def subscribe(self, field_id: str, callback: FieldUpdateCallback) -> Callable[[], None]:
        """Make `field_id` active and call `callback(field_id, value)` on every tick."""
        self.registry.validate_field_id(field_id)
        with self._lock:
            self._subscribers.setdefault(field_id, []).append(callback)

        def unsubscribe() -> None:
            with self._lock:
                callbacks = self._subscribers.get(field_id, [])
                if callback in callbacks:
                    callbacks.remove(callback)
                if not callbacks:
                    self._subscribers.pop(field_id, None)

        return unsubscribe

    def remove_all_listeners(self) -> None:
        with self._lock:
            self._listeners.clear()
            self._subscribers.clear()

    def attach_display(self, surface: DisplaySurface) -> None:
        with self._lock:
            if surface not in self._displays:
                self._displays.append(surface)

    def detach_display(self, surface: DisplaySurface) -> None:
        with self._lock:
            if surface in self._displays:
                self._displays.remove(surface)

    def active_field_ids(self) -> List[str]:
        """Subscribed ids followed by displayed ids, without duplicates."""
        with self._lock:
            ids = list(self._subscribers)
            for surface in self._displays:
                ids.extend(surface.field_ids)
        return list(dict.fromkeys(ids))

    def _notify(self, results: Dict[str, Optional[float]]) -> None:
        with self._lock:
            listeners = list(self._listeners)
            subscribers = {k: list(v) for k, v in self._subscribers.items()}
            displays = list(self._displays)

        for field_id, value in results.items():
            for callback in listeners + subscribers.get(field_id, []):
                try:
                    callback(field_id, value)
                except Exception as e:
                    logger.warning(f"Error in field update listener for '{field_id}': {e}")

        for surface in displays:
            for field_id in surface.field_ids:
                if field_id not in results:
                    continue
                definition = self.registry.get(field_id)
                value = results[field_id]
                color = self._color(definition, value)
                try:
                    surface.update(field_id, value, definition.format(value, self.settings), color)
                except Exception as e:
                    logger.warning(f"Display update failed for '{field_id}': {e}")

    # ------------------------------------------------------------------
    # Tick scheduling
    # ------------------------------------------------------------------

    def tick(self, now: Optional[int] = None) -> Optional[Dict[str, Optional[float]]]:
        """Recompute every active field once and notify.

        Returns:
            `{field_id: value}` for the active fields, or None when the
            previous tick is still running and this one was skipped
        """
        if not self._tick_lock.acquire(blocking=False):
            self.skipped_ticks += 1
            logger.debug("Tick skipped: previous tick still running")
            return None

        try:
            with self.monitor.timed_block("tick"):
                ctx = self._context(now)
                results: Dict[str, Optional[float]] = {}
                for field_id in self.active_field_ids():
                    definition = self.registry.get(field_id)
                    if definition is None:
                        continue
                    results[field_id] = self._compute(definition, ctx)

                with self._lock:
                    self._values.update(results)
                self._notify(results)
            self.tick_count += 1
            return results
        finally:
            self._tick_lock.release()

    def _run(self) -> None:
        interval = self.interval_ms / 1000.0
        next_due = time.monotonic() + interval

        while not self._stop_event.wait(max(0.0, next_due - time.monotonic())):
            if not self._paused:
                self.tick()

            next_due += interval
            now = time.monotonic()
            if now > next_due:
                missed = int((now - next_due) // interval) + 1
                self.skipped_ticks += missed
                next_due += missed * interval
                logger.debug(f"Tick overran, skipped {missed} slot(s)")

    def start(self) -> None:
        """Start the periodic tick on a daemon thread."""
        if self.is_running:
            return
        self._stop_event.clear()
        self._paused = False
        self._thread = threading.Thread(target=self._run, name="ridemetrics-tick", daemon=True)
        self._thread.start()
        logger.info(f"Calculation manager started ({self.interval_ms:.0f} ms interval)")

    def stop(self, timeout: Optional[float] = None) -> None:
        """Stop the periodic tick and wait for the thread to exit."""
        if self._thread is None:
            return
        self._stop_event.set()
        if self._thread is not threading.current_thread():
            self._thread.join(timeout if timeout is not None else max(1.0, self.interval_ms / 100))
        self._thread = None
        logger.info(f"Calculation manager stopped after {self.tick_count} ticks ({self.skipped_ticks} skipped)")

    def pause(self) -> None:
        """Keep the scheduler alive but stop recomputing."""
        self._paused = True

    def resume(self) -> None:
        self._paused = False

    def tick_stats(self) -> Dict[str, Any]:
        """Tick counters with the timing of recorded ticks and the number that overran."""
        return {
            "ticks": self.tick_count,
            "skipped": self.skipped_ticks,
            "timing": self.monitor.get_stats().get("tick", {}),
            "slow": len(self.monitor.get_slow_operations()),
        }

    def set_profiling(self, enabled: bool) -> None:
        """Turn tick timing on or off; counters are kept either way."""
        if enabled:
            self.monitor.enable()
        else:
            self.monitor.disable()

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def is_active(self) -> bool:
        return self.is_running and not self._paused
