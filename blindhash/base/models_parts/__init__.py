"""One-class-per-file result models."""

from .salt_result import SaltResult, VersionId
from .verify_result import VerifyResult
from .new_password_result import NewPasswordResult

__all__ = ["SaltResult", "VersionId", "VerifyResult", "NewPasswordResult"]
