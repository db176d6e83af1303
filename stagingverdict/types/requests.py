"""Change request and review data models."""

from dataclasses import dataclass, field

# Request states in which a selected request must leave the staging area
OBSOLETE_STATES = ("declined", "superseded", "revoked")

# Order in which review scopes are reported
SCOPE_KINDS = ("group", "user", "project", "package")


@dataclass(frozen=True)
class ReviewScope:
    """Who or what has to act on a review."""

    kind: str  # one of SCOPE_KINDS
    who: str


@dataclass
class Review:
    """Review attached to a change request."""

    id: int
    state: str  # "new", "accepted", "declined", ...
    by_group: str | None = None
    by_user: str | None = None
    by_project: str | None = None
    by_package: str | None = None

    @property
    def accepted(self) -> bool:
        return self.state == "accepted"

    @property
    def scopes(self) -> list[ReviewScope]:
        """Populated scope fields, in group, user, project, package order.

        Usually a single entry, but the store does not forbid several.
        """
        scopes = []
        for kind in SCOPE_KINDS:
            who = getattr(self, f"by_{kind}")
            if who:
                scopes.append(ReviewScope(kind=kind, who=who))
        return scopes


@dataclass
class RequestAction:
    """Action of a change request (submit, delete, ...)."""

    type: str
    target_project: str | None = None
    target_package: str | None = None
    source_project: str | None = None
    source_package: str | None = None


@dataclass(eq=False)
class ChangeRequest:
    """Change request, identified by its number."""

    number: int
    state: str  # "new", "review", "accepted", "declined", "superseded", "revoked"
    description: str | None = None
    reviews: list[Review] = field(default_factory=list)
    actions: list[RequestAction] = field(default_factory=list)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ChangeRequest):
            return NotImplemented
        return self.number == other.number

    def __hash__(self) -> int:
        return hash(self.number)

    @property
    def obsolete(self) -> bool:
        """Whether the request reached a state that invalidates its selection."""
        return self.state in OBSOLETE_STATES

    @property
    def first_target_package(self) -> str | None:
        if not self.actions:
            return None
        return self.actions[0].target_package

    def to_dict(self) -> dict[str, object]:
        return {
            "number": self.number,
            "state": self.state,
            "package": self.first_target_package,
        }


@dataclass
class MissingReview:
    """Review that has to be accepted before the staging area can be."""

    id: int
    request: int
    state: str
    package: str | None
    by: str

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "request": self.request,
            "state": self.state,
            "package": self.package,
            "by": self.by,
        }
