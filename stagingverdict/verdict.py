"""
Acceptance verdict of a staging area.

Folds request membership, review state, build health and automated checks
into one overall state, with a strict precedence:

    empty > unacceptable > building/failed > testing/failed > review > acceptable
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, TypeVar

from stagingverdict.checks import CheckAggregator, CheckInfo
from stagingverdict.exceptions import BackendError
from stagingverdict.logging import get_logger, log_state_decision
from stagingverdict.probe import BuildInfo, BuildStatusProbe
from stagingverdict.reviews import ReviewInspector
from stagingverdict.tracker import RequestTracker
from stagingverdict.types.builds import BrokenPackage, BuildingRepository
from stagingverdict.types.checks import Check
from stagingverdict.types.requests import ChangeRequest, MissingReview

if TYPE_CHECKING:
    from stagingverdict.client import StagingClient
    from stagingverdict.staging import StagingProject

T = TypeVar("T")

logger = get_logger("verdict")


class OverallState(str, Enum):
    """Overall state of a staging area."""

    EMPTY = "empty"
    UNACCEPTABLE = "unacceptable"
    BUILDING = "building"
    FAILED = "failed"
    TESTING = "testing"
    REVIEW = "review"
    ACCEPTABLE = "acceptable"


@dataclass(frozen=True)
class StagingReport:
    """Immutable snapshot of every field of one evaluation."""

    name: str
    description: str | None
    overall_state: OverallState
    selected_requests: tuple[ChangeRequest, ...]
    untracked_requests: tuple[ChangeRequest, ...]
    obsolete_requests: tuple[ChangeRequest, ...]
    missing_reviews: tuple[MissingReview, ...]
    broken_packages: tuple[BrokenPackage, ...]
    building_repositories: tuple[BuildingRepository, ...]
    checks: tuple[Check, ...]
    missing_checks: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation of the report."""
        return {
            "name": self.name,
            "description": self.description,
            "obsolete_requests": [r.to_dict() for r in self.obsolete_requests],
            "building_repositories": [r.to_dict() for r in self.building_repositories],
            "broken_packages": [p.to_dict() for p in self.broken_packages],
            "untracked_requests": [r.to_dict() for r in self.untracked_requests],
            "missing_reviews": [r.to_dict() for r in self.missing_reviews],
            "selected_requests": [r.to_dict() for r in self.selected_requests],
            "overall_state": self.overall_state.value,
            "checks": [c.to_dict() for c in self.checks],
            "missing_checks": list(self.missing_checks),
        }


class StagingVerdict:
    """
    One evaluation of a staging area.

    Every derived field is computed on first access and memoized for the
    lifetime of the instance; create a new instance to re-evaluate. Field
    computation is serialized by a lock, so a shared instance never queries a
    collaborator twice for the same field.

    Any backend error propagates and aborts the evaluation.

    Example:
        ```python
        verdict = StagingVerdict(staging, client)
        if verdict.overall_state is OverallState.REVIEW:
            for review in verdict.missing_reviews:
                print(review.request, review.by)
        ```
    """

    def __init__(self, project: "StagingProject", client: "StagingClient") -> None:
        """
        Initialize the evaluation.

        Args:
            project: Staging area to evaluate
            client: Client (or mock) exposing builds, requests and
                status_reports resource clients
        """
        self.project = project
        self.tracker = RequestTracker(client.requests)
        self.inspector = ReviewInspector()
        self.probe = BuildStatusProbe(client.builds)
        self.aggregator = CheckAggregator(client.status_reports)

        self._lock = threading.RLock()
        self._cache: dict[str, Any] = {}

    @property
    def name(self) -> str:
        return self.project.name

    def _memoized(self, slot: str, compute: Callable[[], T]) -> T:
        with self._lock:
            if slot not in self._cache:
                try:
                    self._cache[slot] = compute()
                except BackendError as e:
                    logger.warning(f"{self.name}: evaluation aborted computing {slot}: {e}")
                    raise
            return self._cache[slot]

    # Requests and reviews

    @property
    def open_requests(self) -> list[ChangeRequest]:
        """Requests with open reviews assigned to the staging area."""
        return self._memoized(
            "open_requests", lambda: self.tracker.open_requests(self.name)
        )

    @property
    def selected_requests(self) -> list[ChangeRequest]:
        """Requests listed in the staging metadata."""
        return self._memoized(
            "selected_requests",
            lambda: self.tracker.selected_requests(self.project.meta),
        )

    @property
    def untracked_requests(self) -> list[ChangeRequest]:
        """Requests with open reviews that are not selected into the area."""
        return self.tracker.untracked_requests(
            self.open_requests, self.selected_requests
        )

    @property
    def obsolete_requests(self) -> list[ChangeRequest]:
        """Selected requests that are declined, superseded or revoked."""
        return self.tracker.obsolete_requests(self.selected_requests)

    @property
    def missing_reviews(self) -> list[MissingReview]:
        """Reviews to be accepted before the staging area can be."""
        return self._memoized(
            "missing_reviews",
            lambda: self.inspector.missing_reviews(
                self.name, self.open_requests, self.selected_requests
            ),
        )

    # Builds

    def _build_info(self) -> BuildInfo:
        return self._memoized("build_info", lambda: self.probe.probe(self.name))

    @property
    def broken_packages(self) -> list[BrokenPackage]:
        """Packages of the staging area that are not building properly."""
        return self._build_info().broken_packages

    @property
    def building_repositories(self) -> list[BuildingRepository]:
        """Repositories of the staging area that are still building."""
        return self._build_info().building_repositories

    # Checks

    def _check_info(self) -> CheckInfo:
        return self._memoized(
            "check_info",
            lambda: self.aggregator.aggregate(self.name, self.project.repositories),
        )

    @property
    def checks(self) -> list[Check]:
        """Checks of the latest status reports."""
        return self._check_info().checks

    @property
    def missing_checks(self) -> list[str]:
        """Required checks without a result."""
        return self._check_info().missing_checks

    # State

    def build_state(self) -> OverallState:
        if self.building_repositories:
            return OverallState.BUILDING
        if self.broken_packages:
            return OverallState.FAILED
        return OverallState.ACCEPTABLE

    def check_state(self) -> OverallState:
        if self.missing_checks:
            return OverallState.TESTING

        for check in self.checks:
            if check.pending:
                return OverallState.TESTING
            if check.failed:
                return OverallState.FAILED

        return OverallState.ACCEPTABLE

    @property
    def overall_state(self) -> OverallState:
        """Overall state of the staging area."""
        return self._memoized("overall_state", self._compute_overall_state)

    def _compute_overall_state(self) -> OverallState:
        if not self.selected_requests:
            log_state_decision(self.name, OverallState.EMPTY.value, "no selected requests")
            return OverallState.EMPTY

        if self.untracked_requests or self.obsolete_requests:
            log_state_decision(
                self.name,
                OverallState.UNACCEPTABLE.value,
                f"{len(self.untracked_requests)} untracked, "
                f"{len(self.obsolete_requests)} obsolete requests",
            )
            return OverallState.UNACCEPTABLE

        state = self.build_state()
        if state is not OverallState.ACCEPTABLE:
            log_state_decision(self.name, state.value, "build results")
            return state

        state = self.check_state()
        if state is not OverallState.ACCEPTABLE:
            log_state_decision(self.name, state.value, "automated checks")
            return state

        if self.missing_reviews:
            log_state_decision(
                self.name,
                OverallState.REVIEW.value,
                f"{len(self.missing_reviews)} missing reviews",
            )
            return OverallState.REVIEW

        log_state_decision(self.name, OverallState.ACCEPTABLE.value, "all layers pass")
        return OverallState.ACCEPTABLE

    def evaluate(self) -> StagingReport:
        """
        Compute every field and return them as an immutable record.

        Returns:
            StagingReport of this evaluation
        """
        return StagingReport(
            name=self.name,
            description=self.project.description,
            overall_state=self.overall_state,
            selected_requests=tuple(self.selected_requests),
            untracked_requests=tuple(self.untracked_requests),
            obsolete_requests=tuple(self.obsolete_requests),
            missing_reviews=tuple(self.missing_reviews),
            broken_packages=tuple(self.broken_packages),
            building_repositories=tuple(self.building_repositories),
            checks=tuple(self.checks),
            missing_checks=tuple(self.missing_checks),
        )
