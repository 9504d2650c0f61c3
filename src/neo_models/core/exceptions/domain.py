"""Domain-specific exceptions for neo-models.

These exceptions relate to the business object lifecycle: illegal
state transitions, misuse of model definitions, authorization and
failures that cross the data portal boundary.
"""

from typing import Any, Optional

from .base import NeoModelsError


class ModelError(NeoModelsError):
    """Raised when a model is used in a way its definition forbids.

    The error code identifies the kind of misuse; the message is built
    from the code template and the positional arguments.
    """

    MESSAGES = {
        "transition": "The model state cannot be changed from {0} to {1}.",
        "read_only": "The {1} property of {0} model is read-only.",
        "no_property": "The {0} model has no property named {1}.",
        "duplicate_property": "The {0} model already has a property named {1}.",
        "invalid_child": "The {1} property of {0} model must be one of {2}, got {3}.",
        "invalid_item": "The item type of {0} collection must be {2}, got {1}.",
        "no_dao": "No data access object is available for {0} model.",
        "no_dao_method": "The data access object of {0} model has no method named {1}.",
        "no_key": "The {0} model has no key property to remove it by.",
        "reentrant": "The {0} model is already running a data portal action.",
        "get_value": "The transfer context cannot read property values.",
        "set_value": "The transfer context cannot write property values.",
        "sealed": "The {0} definition is sealed and cannot be changed.",
        "not_supported": "The {0} model does not support the {1} operation.",
    }

    def __init__(self, error_code: str, *args: Any):
        template = self.MESSAGES.get(error_code, "A model error occurred: {0}.")
        try:
            message = template.format(*args)
        except IndexError:
            message = template
        super().__init__(
            message,
            error_code=error_code,
            details={"arguments": [str(arg) for arg in args]},
        )


class AuthorizationError(NeoModelsError):
    """Raised when an explicit permission check fails."""

    DEFAULT_MESSAGE = "The user has no permission to execute the action."

    def __init__(self, message: Optional[str] = None, **kwargs):
        super().__init__(message or self.DEFAULT_MESSAGE, **kwargs)


class DataPortalError(NeoModelsError):
    """Wraps any error raised while a data portal action runs.

    Carries the model description and name, the action and the stage
    where the failure occurred, and the original cause.
    """

    def __init__(
        self,
        model_description: str,
        model_name: str,
        action: Any,
        cause: BaseException,
        stage: Optional[Any] = None,
    ):
        action_name = getattr(action, "value", action)
        stage_name = getattr(stage, "value", stage)
        super().__init__(
            f"{model_description} {model_name}: {action_name} failed"
            f"{f' at {stage_name}' if stage_name else ''}: {cause}",
            error_code="data_portal",
            details={
                "model_description": model_description,
                "model_name": model_name,
                "action": action_name,
                "stage": stage_name,
                "cause": repr(cause),
            },
        )
        self.model_description = model_description
        self.model_name = model_name
        self.action = action
        self.stage = stage
        self.cause = cause
