"""Host platform contract and the in-process reference host."""

from .base import (
    AssetSpec,
    BlockRegistrationError,
    BlockTypeSpec,
    Platform,
    PlatformError,
)
from .factory import create_local_platform
from .local import LocalPlatform

__all__ = [
    "AssetSpec",
    "BlockRegistrationError",
    "BlockTypeSpec",
    "LocalPlatform",
    "Platform",
    "PlatformError",
    "create_local_platform",
]
