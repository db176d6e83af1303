"""Automated check data models."""

from dataclasses import dataclass, field

PENDING_STATES = ("pending",)
FAILED_STATES = ("failure", "error")


@dataclass
class Check:
    """Outcome of one named automated check."""

    name: str
    state: str  # "pending", "success", "failure", "error"
    url: str | None = None
    short_description: str | None = None

    @property
    def pending(self) -> bool:
        return self.state in PENDING_STATES

    @property
    def failed(self) -> bool:
        return self.state in FAILED_STATES

    def to_dict(self) -> dict[str, str | None]:
        return {
            "name": self.name,
            "state": self.state,
            "url": self.url,
            "short_description": self.short_description,
        }


@dataclass
class StatusReport:
    """Latest status report of a repository or repository architecture."""

    uuid: str
    checks: list[Check] = field(default_factory=list)
    missing_checks: list[str] = field(default_factory=list)
