"""Domain enumerations for the job board.

Enums represent fixed sets of domain values (cache tag kinds, identity
lifecycle events, job listing attributes).
"""

from enum import Enum


class CacheTagKind(str, Enum):
    """Class of cached data. Closed set; values are the tag namespace names."""

    USERS = "users"
    ORGANIZATIONS = "organizations"
    JOB_LISTINGS = "jobListings"
    JOB_LISTING_APPLICATIONS = "jobListingApplications"
    USER_NOTIFICATIONS = "userNotifications"
    USER_RESUMES = "userResumes"
    ORGANIZATION_USER_SETTINGS = "organizationUserSettings"
    USER_NOTIFICATION_SETTINGS = "userNotificationSettings"


class IdentityEntity(str, Enum):
    """Externally-owned identity record types mirrored locally."""

    USER = "user"
    ORGANIZATION = "organization"


class LifecyclePhase(str, Enum):
    """Lifecycle phase reported by the identity provider."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


class IdentityEventType(str, Enum):
    """Webhook event types handled by the identity synchronization workflow."""

    USER_CREATED = "user.created"
    USER_UPDATED = "user.updated"
    USER_DELETED = "user.deleted"
    ORGANIZATION_CREATED = "organization.created"
    ORGANIZATION_UPDATED = "organization.updated"
    ORGANIZATION_DELETED = "organization.deleted"

    @property
    def entity(self) -> IdentityEntity:
        return IdentityEntity(self.value.split(".", 1)[0])

    @property
    def phase(self) -> LifecyclePhase:
        return LifecyclePhase(self.value.split(".", 1)[1])

    @classmethod
    def values(cls) -> frozenset[str]:
        """Return all handled event type strings."""
        return frozenset(t.value for t in cls)


class UpdateMissingPolicy(str, Enum):
    """What an "updated" event does when the local row does not exist.

    UPSERT creates the row (and its dependent rows) as a "created" event would.
    REJECT logs and skips the event without writing anything.
    """

    UPSERT = "upsert"
    REJECT = "reject"


class WageInterval(str, Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class LocationRequirement(str, Enum):
    IN_OFFICE = "in-office"
    HYBRID = "hybrid"
    REMOTE = "remote"


class ExperienceLevel(str, Enum):
    JUNIOR = "junior"
    MID_LEVEL = "mid-level"
    SENIOR = "senior"


class JobListingStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    DELISTED = "delisted"


class JobListingType(str, Enum):
    INTERNSHIP = "internship"
    PART_TIME = "part-time"
    FULL_TIME = "full-time"
    CONTRACT = "contract"


class ApplicationStage(str, Enum):
    APPLIED = "applied"
    SHORTLISTED = "shortlisted"
    INTERVIEWING = "interviewing"
    OFFER = "offer"
    HIRED = "hired"
    REJECTED = "rejected"
