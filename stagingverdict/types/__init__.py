"""stagingverdict type definitions.

This module exports all data model types used by the package.
"""

from stagingverdict.types.builds import (
    BrokenPackage,
    BuildingRepository,
    BuildResult,
    BuildSummary,
    PackageStatus,
    StatusCount,
)
from stagingverdict.types.checks import Check, StatusReport
from stagingverdict.types.projects import (
    Distribution,
    Project,
    Repository,
    RepositoryArchitecture,
)
from stagingverdict.types.requests import (
    ChangeRequest,
    MissingReview,
    RequestAction,
    Review,
    ReviewScope,
)

__all__ = [
    # Project types
    "Distribution",
    "Project",
    "Repository",
    "RepositoryArchitecture",
    # Build types
    "BuildResult",
    "PackageStatus",
    "BuildSummary",
    "StatusCount",
    "BrokenPackage",
    "BuildingRepository",
    # Check types
    "Check",
    "StatusReport",
    # Request types
    "ChangeRequest",
    "RequestAction",
    "Review",
    "ReviewScope",
    "MissingReview",
]
