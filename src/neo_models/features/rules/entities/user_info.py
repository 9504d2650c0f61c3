"""Principal base class."""

from typing import Optional

from ....core.exceptions import ConstructorError, NotImplementedMethodError


class UserInfo:
    """Base class of the principal checked by authorization rules.

    Subclasses implement is_in_role(); the base raises
    NotImplementedMethodError.
    """

    def __init__(self, user_code: str, user_name: Optional[str] = None, email: Optional[str] = None):
        if not isinstance(user_code, str) or not user_code:
            raise ConstructorError("UserInfo", "user_code", "must be a non-empty string.")
        self.user_code = user_code
        self.user_name = user_name
        self.email = email

    def is_in_role(self, role: str) -> bool:
        raise NotImplementedMethodError(self.__class__.__name__, "is_in_role")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(user_code={self.user_code!r})"
