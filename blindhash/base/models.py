"""
Result models public surface.

Re-exports the implementations under ``blindhash.base.models_parts``.
"""

from .models_parts import NewPasswordResult, SaltResult, VerifyResult, VersionId

__all__ = ["SaltResult", "VersionId", "VerifyResult", "NewPasswordResult"]
