"""GitHub REST API integration for committing the rendered artifacts."""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import requests

GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_API_VERSION = "2022-11-28"
REQUEST_TIMEOUT_SECONDS = 30
MAX_RETRIES = 3

LOGGER = logging.getLogger(__name__)


def commit_files(token: str, repository: str, message: str, files: dict[str, str]) -> str:
    """Commit ``files`` (repository path -> text content) to the default branch.

    Args:
        token: GitHub token with contents write permission.
        repository: ``owner/repo``.
        message: Commit message.
        files: File contents keyed by path relative to the repository root.

    Returns:
        SHA of the new commit.
    """
    repo_url = _repo_url(repository)
    headers = _github_headers(token)

    repo_data = _request_with_backoff(method="GET", url=repo_url, headers=headers).json()
    branch = repo_data["default_branch"]

    ref_data = _request_with_backoff(
        method="GET",
        url=f"{repo_url}/git/ref/heads/{branch}",
        headers=headers,
    ).json()
    parent_sha = ref_data["object"]["sha"]

    commit_data = _request_with_backoff(
        method="GET",
        url=f"{repo_url}/git/commits/{parent_sha}",
        headers=headers,
    ).json()
    base_tree_sha = commit_data["tree"]["sha"]

    tree_data = _request_with_backoff(
        method="POST",
        url=f"{repo_url}/git/trees",
        headers=headers,
        json_payload={"base_tree": base_tree_sha, "tree": _tree_entries(files)},
    ).json()

    new_commit = _request_with_backoff(
        method="POST",
        url=f"{repo_url}/git/commits",
        headers=headers,
        json_payload={"message": message, "tree": tree_data["sha"], "parents": [parent_sha]},
    ).json()

    _request_with_backoff(
        method="PATCH",
        url=f"{repo_url}/git/refs/heads/{branch}",
        headers=headers,
        json_payload={"sha": new_commit["sha"]},
    )

    LOGGER.info("Committed %s file(s) to %s@%s: %s", len(files), repository, branch, new_commit["sha"])
    return new_commit["sha"]


def _tree_entries(files: dict[str, str]) -> list[dict[str, str]]:
    return [
        {"path": path, "mode": "100644", "type": "blob", "content": content}
        for path, content in files.items()
    ]


def _repo_url(repository: str) -> str:
    owner, _, repo = repository.partition("/")
    if not owner or not repo:
        raise RuntimeError(f"Repository must be given as owner/repo, got {repository!r}")
    return f"{GITHUB_API_BASE_URL}/repos/{owner}/{repo}"


def _github_headers(token: str) -> dict[str, str]:
    if not token:
        raise RuntimeError("GITHUB_TOKEN is required when commit is enabled")
    return {
        "Authorization": f"Bearer {token}",
        "Accept": "application/vnd.github+json",
        "X-GitHub-Api-Version": GITHUB_API_VERSION,
    }


def _request_with_backoff(
    *,
    method: str,
    url: str,
    headers: dict[str, str],
    json_payload: dict[str, Any] | None = None,
) -> requests.Response:
    """Send a GitHub request, retrying only transient failures.

    Rate limits (429), server errors (5xx), connection errors and timeouts are
    retried up to ``MAX_RETRIES`` attempts with doubling delays. Any other 4xx
    is raised straight away as ``RuntimeError`` with the response body.
    """
    attempt = 0
    while True:
        attempt += 1
        final_attempt = attempt >= MAX_RETRIES
        try:
            response = requests.request(
                method=method,
                url=url,
                headers=headers,
                json=json_payload,
                timeout=REQUEST_TIMEOUT_SECONDS,
            )
        except (requests.ConnectionError, requests.Timeout) as exc:
            if final_attempt:
                raise RuntimeError(f"GitHub API {method} {url} failed after {attempt} attempts: {exc}") from exc
            LOGGER.warning("GitHub API %s %s: %s, retrying", method, url, exc)
            time.sleep(_backoff_delay(attempt))
            continue
        except requests.RequestException as exc:
            raise RuntimeError(f"GitHub API {method} {url} failed: {exc}") from exc

        status = response.status_code
        if (status == 429 or status >= 500) and not final_attempt:
            LOGGER.warning("GitHub API %s %s: HTTP %s, retrying", method, url, status)
            time.sleep(_backoff_delay(attempt))
            continue
        if status >= 400:
            raise RuntimeError(f"GitHub API {method} {url} returned HTTP {status}: {_response_body(response)}")
        return response


def _backoff_delay(attempt: int) -> float:
    return 2.0 ** (attempt - 1)


def _response_body(response: requests.Response) -> str:
    try:
        return json.dumps(response.json())
    except ValueError:
        return response.text
