from verifier.qa_gate.transport import api_json_request, normalize_api_base

DEFAULT_API_BASE = "https://api.github.com"
PAGE_SIZE = 100


class GitHubClientError(Exception):
    pass


def _base(api_base):
    base = normalize_api_base(api_base or DEFAULT_API_BASE)
    if not base:
        raise GitHubClientError("Missing api_base")
    return base


def _require_list_response(status, data, endpoint_label, raw):
    if status != 200 or not isinstance(data, list):
        raise GitHubClientError(
            f"GitHub API failure endpoint={endpoint_label} status={status} body={raw}"
        )
    return data


def list_issue_comments(api_base, org, repo, number, headers=None):
    base = _base(api_base)
    url = f"{base}/repos/{org}/{repo}/issues/{number}/comments?per_page={PAGE_SIZE}"
    status, data, raw = api_json_request("GET", url, headers=headers)
    return _require_list_response(status, data, f"issues/{number}/comments", raw)


def list_reviews(api_base, org, repo, number, headers=None):
    base = _base(api_base)
    url = f"{base}/repos/{org}/{repo}/pulls/{number}/reviews?per_page={PAGE_SIZE}"
    status, data, raw = api_json_request("GET", url, headers=headers)
    return _require_list_response(status, data, f"pulls/{number}/reviews", raw)
