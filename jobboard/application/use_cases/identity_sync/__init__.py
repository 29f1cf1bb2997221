"""Identity synchronization workflow: validate, reconcile, invalidate."""

from jobboard.application.use_cases.identity_sync.base import IdentitySyncHandler
from jobboard.application.use_cases.identity_sync.dispatcher import (
    EventParser,
    IdentityEventDispatcher,
)
from jobboard.application.use_cases.identity_sync.organization_sync import (
    OrganizationSyncHandler,
)
from jobboard.application.use_cases.identity_sync.steps import DEFAULT_RETRY_ON, StepRunner
from jobboard.application.use_cases.identity_sync.user_sync import UserSyncHandler

__all__ = [
    "DEFAULT_RETRY_ON",
    "EventParser",
    "IdentityEventDispatcher",
    "IdentitySyncHandler",
    "OrganizationSyncHandler",
    "StepRunner",
    "UserSyncHandler",
]
