"""Missing reviews of the requests in a staging area."""

from stagingverdict.types.requests import ChangeRequest, MissingReview


class ReviewInspector:
    """Finds reviews that block the acceptance of a staging area."""

    def missing_reviews(
        self,
        area_name: str,
        open_requests: list[ChangeRequest],
        selected_requests: list[ChangeRequest],
    ) -> list[MissingReview]:
        """
        Collect reviews that are neither accepted nor assigned to the area.

        The union of open and selected requests is deduplicated by number and
        walked in number order. A review with several populated scopes yields
        one record per scope.

        Args:
            area_name: Staging area (project) name
            open_requests: Requests with open reviews for the area
            selected_requests: Requests listed in the area metadata

        Returns:
            List of MissingReview records
        """
        requests = {request.number: request for request in open_requests}
        for request in selected_requests:
            requests.setdefault(request.number, request)

        missing = []
        for number in sorted(requests):
            request = requests[number]
            for review in request.reviews:
                if review.accepted or review.by_project == area_name:
                    continue
                for scope in review.scopes:
                    missing.append(
                        MissingReview(
                            id=review.id,
                            request=request.number,
                            state=review.state,
                            package=request.first_target_package,
                            by=scope.who,
                        )
                    )
        return missing
