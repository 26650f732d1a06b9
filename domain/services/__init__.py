"""
Domain services containing pure wheel logic.
"""

from domain.services.spin_planner import SpinPlanner
from domain.services.weighted_selector import WeightedSelector

__all__ = ["SpinPlanner", "WeightedSelector"]
