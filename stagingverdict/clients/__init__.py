"""stagingverdict resource clients."""

from stagingverdict.clients.builds import BuildResultsClient
from stagingverdict.clients.projects import ProjectsClient
from stagingverdict.clients.requests import RequestsClient
from stagingverdict.clients.status_reports import StatusReportsClient

__all__ = [
    "ProjectsClient",
    "BuildResultsClient",
    "RequestsClient",
    "StatusReportsClient",
]
