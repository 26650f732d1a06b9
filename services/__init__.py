"""
Application services layer.

Services drive the wheel domain: the spin state machine, per-guild wheel
management and odds statistics.
"""

from services.result import Result
from services.interfaces import ISpinController, IWheelRenderSink
from services.spin_controller import SpinController, SpinOutcome, SpinPhase, TickResult
from services.wheel_stats_service import FairnessReport, WheelStatsService

__all__ = [
    "Result",
    "ISpinController",
    "IWheelRenderSink",
    "SpinController",
    "SpinOutcome",
    "SpinPhase",
    "TickResult",
    "FairnessReport",
    "WheelStatsService",
]
