"""
state.py
========
Per-session booking state passed into and returned from every turn.
"""

from dataclasses import dataclass, field, replace
from typing import Tuple

from .appointment import Appointment
from .steps import Step


class MissingBookingInfo(LookupError):
    """
    A step needs a record an earlier step should have collected
    (e.g. choosing a date without a chosen doctor). The session is reset.
    """


@dataclass(frozen=True)
class BookingState:
    step: Step = Step.initial
    appointment: Appointment = field(default_factory=Appointment)
    # Options presented by the previous turn, needed to validate the next one
    suggested_specialization_ids: Tuple[int, ...] = ()
    offered_doctor_ids: Tuple[int, ...] = ()

    def advance(self, step: Step, **changes) -> "BookingState":
        return replace(self, step=step, **changes)
