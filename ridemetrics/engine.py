"""
Metrics engine facade.

Ties a field registry, a calculation manager and the history analytics
together behind one explicitly constructed object. Several engines can
coexist; nothing is shared between instances.
"""
import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from .calculation_manager import CalculationManager, DisplaySurface, FieldUpdateCallback
from .calculations.zones import ZoneColor, time_in_zones
from .domain import (
    ConnectionsState,
    MeasurementsState,
    UserSettings,
    WorkoutRecord,
    WorkoutState,
    ZoneConfig,
)
from .fields import FieldDefinition, FieldRegistry, create_default_registry
from .power_duration import (
    PersonalRecordEvent,
    PowerCurvePoint,
    compute_personal_records,
    compute_power_curve,
    personal_record_history,
)
from .summary import summarize_workout
from .training_load import (
    DateLike,
    FitnessPoint,
    TrainingLoadSample,
    WeeklyLoad,
    compute_fitness_trend,
    daily_training_load,
    weekly_training_load,
)

logger = logging.getLogger(__name__)

WorkoutLike = Union[WorkoutRecord, Mapping[str, Any]]


class MetricsEngine:
    """Derived training metrics: live fields plus history analytics.

    Usage:
        engine = MetricsEngine(settings, measurements=state, connections=connections)
        engine.on_update(lambda field_id, value: ...)
        engine.subscribe("power-3s", handler)
        engine.start()

        trend = engine.compute_fitness_trend(engine.daily_training_load(history))
    """

    def __init__(
        self,
        settings: Optional[UserSettings] = None,
        measurements: Optional[MeasurementsState] = None,
        workout_state: Optional[WorkoutState] = None,
        connections: Optional[ConnectionsState] = None,
        registry: Optional[FieldRegistry] = None,
        interval_ms: Optional[float] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.registry = registry if registry is not None else create_default_registry()
        self.manager = CalculationManager(
            self.registry,
            measurements=measurements,
            workout_state=workout_state,
            settings=settings,
            connections=connections,
            interval_ms=interval_ms,
            clock=clock,
        )
        logger.debug(f"Metrics engine created with {len(self.registry)} fields")

    @property
    def settings(self) -> UserSettings:
        return self.manager.settings

    # --- Live state ---

    def update_measurements(self, measurements: MeasurementsState) -> None:
        self.manager.update_measurements(measurements)

    def update_workout_state(self, workout_state: WorkoutState) -> None:
        self.manager.update_workout_state(workout_state)

    def update_connections(self, connections: ConnectionsState) -> None:
        self.manager.update_connections(connections)

    def update_settings(self, settings: UserSettings) -> None:
        self.manager.update_settings(settings)

    # --- Fields ---

    def calculate_field(self, field_id: str, now: Optional[int] = None) -> Optional[float]:
        return self.manager.calculate_field(field_id, now)

    def format_field(self, field_id: str, value: Optional[float] = None) -> str:
        """Formatted display string for a field's value (last computed when omitted)."""
        definition = self.registry.validate_field_id(field_id)
        if value is None:
            value = self.manager.get_value(field_id)
        return definition.format(value, self.settings)

    def field_color(self, field_id: str) -> Optional[ZoneColor]:
        """Zone colours for the last computed value of a field."""
        self.registry.validate_field_id(field_id)
        return self.manager.field_color(field_id)

    def register_field(self, definition: FieldDefinition) -> bool:
        return self.registry.register(definition)

    def unregister_field(self, field_id: str) -> bool:
        return self.registry.unregister(field_id)

    def on_update(self, callback: FieldUpdateCallback) -> Callable[[], None]:
        return self.manager.on_update(callback)

    def subscribe(self, field_id: str, callback: FieldUpdateCallback) -> Callable[[], None]:
        return self.manager.subscribe(field_id, callback)

    def attach_display(self, surface: DisplaySurface) -> None:
        self.manager.attach_display(surface)

    def detach_display(self, surface: DisplaySurface) -> None:
        self.manager.detach_display(surface)

    # --- Scheduling ---

    def start(self) -> None:
        self.manager.start()

    def stop(self) -> None:
        self.manager.stop()

    def tick(self, now: Optional[int] = None) -> Optional[Dict[str, Optional[float]]]:
        return self.manager.tick(now)

    def pause(self) -> None:
        self.manager.pause()

    def resume(self) -> None:
        self.manager.resume()

    def tick_stats(self) -> Dict[str, Any]:
        return self.manager.tick_stats()

    def set_profiling(self, enabled: bool) -> None:
        self.manager.set_profiling(enabled)

    @property
    def is_running(self) -> bool:
        return self.manager.is_running

    # --- History analytics ---

    def daily_training_load(self, workouts: Iterable[WorkoutLike]) -> List[TrainingLoadSample]:
        return daily_training_load(workouts)

    def compute_fitness_trend(
        self,
        samples: Sequence[TrainingLoadSample],
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> List[FitnessPoint]:
        return compute_fitness_trend(samples, start, end)

    def weekly_training_load(self, samples: Sequence[TrainingLoadSample]) -> List[WeeklyLoad]:
        return weekly_training_load(samples)

    def compute_power_curve(self, workouts: Iterable[WorkoutLike]) -> List[PowerCurvePoint]:
        return compute_power_curve(workouts)

    def compute_personal_records(self, workouts: Iterable[WorkoutLike]) -> List[PersonalRecordEvent]:
        return compute_personal_records(workouts)

    def personal_record_history(self, workouts: Iterable[WorkoutLike]) -> List[PersonalRecordEvent]:
        return personal_record_history(workouts)

    def time_in_zones(
        self,
        stream: Sequence,
        reference_value: Optional[float],
        zones: Sequence[ZoneConfig],
    ) -> Dict[int, float]:
        return time_in_zones(stream, reference_value, zones)

    def summarize_workout(
        self,
        start_time: int,
        end_time: Optional[int] = None,
        measurements: Optional[MeasurementsState] = None,
    ) -> Dict[str, Any]:
        """Stored summary for the current (or given) recording."""
        return summarize_workout(
            measurements or self.manager.measurements,
            self.settings,
            start_time,
            end_time,
        )
