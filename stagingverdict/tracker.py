"""Request membership of a staging area."""

from typing import TYPE_CHECKING, Any

from stagingverdict.types.requests import ChangeRequest

if TYPE_CHECKING:
    from stagingverdict.clients.requests import RequestsClient


def request_numbers(meta: dict[str, Any]) -> list[int]:
    """
    Extract the request numbers listed in staging metadata.

    Entries without a usable id are skipped.

    Args:
        meta: Parsed staging metadata, e.g. {"requests": [{"id": 42}]}

    Returns:
        Request numbers in metadata order
    """
    entries = meta.get("requests")
    if not isinstance(entries, list):
        return []

    numbers = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        try:
            numbers.append(int(entry["id"]))
        except (KeyError, TypeError, ValueError):
            continue
    return numbers


class RequestTracker:
    """Determines selected, open, untracked and obsolete requests."""

    def __init__(self, requests: "RequestsClient") -> None:
        self.requests = requests

    def open_requests(self, area_name: str) -> list[ChangeRequest]:
        """Requests with open reviews assigned to the staging area."""
        return self.requests.with_open_reviews_for(by_project=area_name)

    def selected_requests(self, meta: dict[str, Any]) -> list[ChangeRequest]:
        """Requests listed in the staging metadata, with reviews and actions."""
        numbers = request_numbers(meta)
        if not numbers:
            return []
        return self.requests.find_by_numbers(numbers)

    @staticmethod
    def untracked_requests(
        open_requests: list[ChangeRequest], selected_requests: list[ChangeRequest]
    ) -> list[ChangeRequest]:
        """Open requests that are not selected, in open order."""
        selected = {request.number for request in selected_requests}
        return [request for request in open_requests if request.number not in selected]

    @staticmethod
    def obsolete_requests(
        selected_requests: list[ChangeRequest],
    ) -> list[ChangeRequest]:
        """Selected requests that were declined, superseded or revoked."""
        return [request for request in selected_requests if request.obsolete]
