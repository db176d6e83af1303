"""Change requests resource client."""

from typing import TYPE_CHECKING, Any

from stagingverdict.clients.base import as_dict, as_int, as_list, payload, require
from stagingverdict.types.requests import ChangeRequest, RequestAction, Review

if TYPE_CHECKING:
    from stagingverdict.transport import HTTPTransport


class RequestsClient:
    """Client for the request store. Read only."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the requests client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    def with_open_reviews_for(self, by_project: str) -> list[ChangeRequest]:
        """
        List requests having an open review assigned to a project.

        Args:
            by_project: Project the reviews are assigned to

        Returns:
            List of ChangeRequest objects with their reviews and actions
        """
        response = self.transport.get(
            "/requests",
            params={
                "review_states": "new",
                "by_project": by_project,
            },
        )
        return self._parse_requests(response)

    def find_by_numbers(self, numbers: list[int]) -> list[ChangeRequest]:
        """
        Fetch requests by number, including their reviews and actions.

        Unknown numbers are silently absent from the result.

        Args:
            numbers: Request numbers

        Returns:
            List of ChangeRequest objects
        """
        if not numbers:
            return []

        response = self.transport.get(
            "/requests",
            params={
                "ids": ",".join(str(number) for number in numbers),
                "withfullhistory": "0",
            },
        )
        return self._parse_requests(response)

    def _parse_requests(self, response: dict[str, Any]) -> list[ChangeRequest]:
        data = payload(response, "request list")
        # Handle both list and dict responses
        if isinstance(data, list):
            requests = data
        else:
            requests = as_list(as_dict(data, "request list").get("requests"))
        return [self._parse_request(request) for request in requests]

    def _parse_request(self, data: dict[str, Any]) -> ChangeRequest:
        """Parse request data from API response."""
        number = as_dict(data, "request").get("number") or require(data, "id", "request")
        return ChangeRequest(
            number=as_int(number, "request"),
            state=require(data, "state", "request"),
            description=data.get("description"),
            reviews=[self._parse_review(review) for review in as_list(data.get("reviews"))],
            actions=[
                RequestAction(
                    type=require(action, "type", "request action"),
                    target_project=action.get("targetProject"),
                    target_package=action.get("targetPackage"),
                    source_project=action.get("sourceProject"),
                    source_package=action.get("sourcePackage"),
                )
                for action in as_list(data.get("actions"))
            ],
        )

    def _parse_review(self, data: dict[str, Any]) -> Review:
        return Review(
            id=as_int(require(data, "id", "review"), "review"),
            state=require(data, "state", "review"),
            by_group=data.get("byGroup"),
            by_user=data.get("byUser"),
            by_project=data.get("byProject"),
            by_package=data.get("byPackage"),
        )
