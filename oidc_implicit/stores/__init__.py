"""Request state stores"""

from .state_store import (
    CookieStateStore as CookieStateStore,
    MemoryStateStore as MemoryStateStore,
    RequestStateStore as RequestStateStore,
)
