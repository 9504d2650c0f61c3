"""State feature for neo-models.

The lifecycle state machine of editable models.
"""

from .model_state_machine import ModelStateMachine

__all__ = ["ModelStateMachine"]
