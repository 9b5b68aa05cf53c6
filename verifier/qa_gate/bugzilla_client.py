import re

from verifier.qa_gate.transport import api_json_request, normalize_api_base

GITHUB_TRACKER_URL = "https://github.com/"

_PULL_REF_RE = re.compile(r"^([\w.-]+)/([\w.-]+)/pull/(\d+)$")


class BugzillaClientError(Exception):
    pass


def _base(api_base):
    base = normalize_api_base(api_base, "/rest")
    if not base:
        raise BugzillaClientError("Missing api_base")
    return base


def _require_bug(status, data, endpoint_label, raw):
    bugs = data.get("bugs") if isinstance(data, dict) else None
    if status != 200 or not isinstance(bugs, list) or not bugs:
        raise BugzillaClientError(
            f"Bugzilla API failure endpoint={endpoint_label} status={status} body={raw}"
        )
    return bugs[0]


def get_bug(api_base, bug_id, headers=None):
    base = _base(api_base)
    url = f"{base}/bug/{bug_id}"
    status, data, raw = api_json_request("GET", url, headers=headers)
    return _require_bug(status, data, f"bug/{bug_id}", raw)


def parse_external_pull(external_bug):
    """Map one ``external_bugs`` entry to a pull reference, or None."""
    ref = str(external_bug.get("ext_bz_bug_id") or "").strip()
    match = _PULL_REF_RE.match(ref)
    if not match:
        return None
    type_url = str((external_bug.get("type") or {}).get("url") or "")
    return {
        "type_url": type_url,
        "org": match.group(1),
        "repo": match.group(2),
        "number": int(match.group(3)),
    }


def get_external_bug_prs(api_base, bug_id, headers=None):
    base = _base(api_base)
    url = f"{base}/bug/{bug_id}?include_fields=external_bugs"
    status, data, raw = api_json_request("GET", url, headers=headers)
    bug = _require_bug(status, data, f"bug/{bug_id}/external_bugs", raw)
    pulls = []
    for external_bug in bug.get("external_bugs") or []:
        pull = parse_external_pull(external_bug)
        if pull is not None:
            pulls.append(pull)
    return pulls
