from .loader import load_config
from .models import (
    BookmarkFileConfig,
    ScanConfig,
    VaultmarksConfig,
)

__all__ = [
    "BookmarkFileConfig",
    "ScanConfig",
    "VaultmarksConfig",
    "load_config",
]
