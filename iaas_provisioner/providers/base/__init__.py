"""Building blocks shared by IaaS providers."""

from .named_provider import NamedProvider
from .user_data import DEFAULT_USER_DATA, UserDataProvider, pending_user_data

__all__ = [
    "NamedProvider",
    "UserDataProvider",
    "pending_user_data",
    "DEFAULT_USER_DATA",
]
