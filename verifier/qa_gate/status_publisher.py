from verifier.qa_gate.logger import NullLogger
from verifier.qa_gate.transport import api_json_request, normalize_api_base

API_KEY_HEADER = "X-BUGZILLA-API-KEY"
VERIFIED = "VERIFIED"


class StatusPublishError(Exception):
    pass


def mark_bug_verified(api_base, bug_id, headers=None, logger=None, status=VERIFIED):
    logger = logger or NullLogger()
    req_headers = dict(headers or {})
    if API_KEY_HEADER not in req_headers:
        raise StatusPublishError("Status publish failed: missing Bugzilla API key header")

    base = normalize_api_base(api_base, "/rest")
    if not base:
        raise StatusPublishError("Status publish failed: missing api_base")
    url = f"{base}/bug/{bug_id}"
    http_status, _, raw = api_json_request("PUT", url, payload={"status": status}, headers=req_headers)
    logger.log("status_publish", f"bug={bug_id} status={status} http={http_status or 'ERR'}")
    if http_status != 200:
        raise StatusPublishError(
            f"Status publish failed: HTTP {http_status} url={url} body={raw}"
        )
