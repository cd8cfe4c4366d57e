"""
SQLAlchemy models for the Test & Tag reporting service
"""

from .users import User
from .test_sessions import TestSession
from .test_results import TestResult
from .environments import Environment
from .custom_forms import CustomFormType, CustomFormItem
from .revoked_tokens import RevokedToken

__all__ = [
    "User",
    "TestSession",
    "TestResult",
    "Environment",
    "CustomFormType",
    "CustomFormItem",
    "RevokedToken",
]
