#!/usr/bin/env python3
"""
Basic stagingverdict usage example.

Prints the overall state of every staging project of a distribution.
Run with: STAGING_API_URL=https://api.example.org python examples/basic_usage.py [ROOT_PROJECT]
"""

import logging
import sys

from stagingverdict import (
    BackendError,
    ConfigurationError,
    Distribution,
    OverallState,
    StagingClient,
    StagingProject,
    configure_logging,
)

configure_logging(level=logging.INFO, verdict_level=logging.DEBUG)

root = sys.argv[1] if len(sys.argv) > 1 else "openSUSE:Factory"
distribution = Distribution(root_project_name=root)

try:
    client = StagingClient.from_env()
except ConfigurationError as e:
    print(f"Configuration error: {e}")
    sys.exit(2)

with client:
    for staging in StagingProject.for_distribution(client, distribution, only_letter=False):
        try:
            report = staging.verdict().evaluate()
        except BackendError as e:
            print(f"{staging.id:>8}: unavailable ({e})")
            continue

        print(f"{staging.id:>8}: {report.overall_state.value}")
        if report.overall_state is OverallState.FAILED:
            for package in report.broken_packages:
                print(f"          {package.package} {package.state} ({package.repository}/{package.arch})")
        elif report.overall_state is OverallState.BUILDING:
            for repo in report.building_repositories:
                print(f"          {repo.repository}/{repo.arch}: {repo.tobuild} to build")
        elif report.overall_state is OverallState.REVIEW:
            for review in report.missing_reviews:
                print(f"          request {review.request}: waiting for {review.by}")
