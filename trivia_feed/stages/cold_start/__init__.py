"""
Cold start: selection for users who have not yet cleared the cold start gate.

Public API: ColdStartStrategy (protocol), ColdStartResult, PhasedColdStartStrategy.
- base: the contract the feed selector calls.
- phased: default exploration → branching → normal strategy.
- diversity: topic repetition rules shared by the phases.
"""

from .base import ColdStartResult, ColdStartStrategy
from .phased import PhasedColdStartStrategy, phase_for

__all__ = [
    "ColdStartResult",
    "ColdStartStrategy",
    "PhasedColdStartStrategy",
    "phase_for",
]
