"""Checks whether each Bugzilla bug's QA contact has /lgtm'd the fixing PR.

For each bug ID the linked GitHub pull request is looked up through the bug's
external tracker links, the pull's comments (and reviews, when the repository
treats approving reviews as /lgtm) are evaluated, and the verdict is logged and
handed to an optional ``on_verified`` callback.
"""

import argparse
import os
import re
import sys

from verifier.qa_gate import (
    GITHUB_TRACKER_URL,
    BugzillaClientError,
    ConfigLoadError,
    EventLogger,
    GitHubClientError,
    NullLogger,
    evaluate_pull,
    get_bug,
    get_external_bug_prs,
    list_issue_comments,
    list_reviews,
    load_config,
    mark_bug_verified,
    review_acts_as_lgtm,
    verification_report,
)


class VerificationError(Exception):
    def __init__(self, message, bug_id=None):
        super().__init__(message)
        self.bug_id = bug_id


_BUG_ID_RE = re.compile(r"[+-]?[0-9]+")


def parse_bug_id(raw_id):
    """Returns the integer bug ID, or None unless raw_id is plain ASCII digits."""
    text = str(raw_id)
    if not _BUG_ID_RE.fullmatch(text):
        return None
    return int(text)


def _auth_headers(environ=None):
    """Builds GitHub and Bugzilla auth headers from the process env."""
    environ = os.environ if environ is None else environ
    github_headers = {}
    bugzilla_headers = {}
    token = environ.get("GITHUB_TOKEN")
    if token:
        github_headers["Authorization"] = f"token {token}"
    api_key = environ.get("BUGZILLA_API_KEY")
    if api_key:
        bugzilla_headers["X-BUGZILLA-API-KEY"] = api_key
    return github_headers, bugzilla_headers


def get_pull_requests(bug_ids, bugzilla_api_base, headers=None):
    """Resolves each bug ID to its first linked GitHub pull.

    Returns ``(pulls, errors)``; a bug that cannot be resolved contributes one
    error and no pull.
    """
    pulls = []
    errors = []
    for raw_id in bug_ids:
        bug_id = parse_bug_id(raw_id)
        if bug_id is None:
            errors.append(
                VerificationError(f"Failed to convert bugzilla ID {raw_id} to integer: invalid syntax")
            )
            continue
        try:
            external = get_external_bug_prs(bugzilla_api_base, bug_id, headers=headers)
        except BugzillaClientError as exc:
            errors.append(
                VerificationError(f"Failed to get external bugs for bugzilla bug {bug_id}: {exc}", bug_id)
            )
            continue
        found = None
        for pull in external:
            if pull.get("type_url") == GITHUB_TRACKER_URL:
                found = pull
                break
        if found is None:
            errors.append(
                VerificationError(f"failed to identify associated GitHub PR for bugzilla bug {bug_id}", bug_id)
            )
            continue
        pulls.append(
            {
                "bug_id": bug_id,
                "org": found["org"],
                "repo": found["repo"],
                "number": found["number"],
            }
        )
    return pulls, errors


def verify_bugs(
    bug_ids,
    config,
    github_headers=None,
    bugzilla_headers=None,
    logger=None,
    on_verified=None,
):
    logger = logger or NullLogger()
    bugzilla_api = config["bugzilla"]["api_base"]
    github_api = config["github"]["api_base"]

    pulls, errors = get_pull_requests(bug_ids, bugzilla_api, headers=bugzilla_headers)
    for err in errors:
        logger.log("verify_bugs", str(err))

    results = []
    for pull in pulls:
        bug_id = pull["bug_id"]
        org, repo, number = pull["org"], pull["repo"], pull["number"]
        label = f"{org}/{repo}#{number}"
        try:
            bug = get_bug(bugzilla_api, bug_id, headers=bugzilla_headers)
        except BugzillaClientError as exc:
            errors.append(VerificationError(f"Unable to get bugzilla number {bug_id}: {exc}", bug_id))
            logger.log("verify_bugs", str(errors[-1]))
            continue
        try:
            comments = list_issue_comments(github_api, org, repo, number, headers=github_headers)
        except GitHubClientError as exc:
            errors.append(
                VerificationError(f"Unable to get comments for github pull {label}: {exc}", bug_id)
            )
            logger.log("verify_bugs", str(errors[-1]))
            continue
        reviews = []
        if review_acts_as_lgtm(config, org, repo):
            try:
                reviews = list_reviews(github_api, org, repo, number, headers=github_headers)
            except GitHubClientError as exc:
                errors.append(
                    VerificationError(f"Unable to get reviews for github pull {label}: {exc}", bug_id)
                )
                logger.log("verify_bugs", str(errors[-1]))
                continue

        evaluation = evaluate_pull(comments, reviews, logger=logger)
        status = bug.get("status")
        result = {
            "bug_id": bug_id,
            "status": status,
            "org": org,
            "repo": repo,
            "number": number,
            "approved": evaluation["approved"],
            "qa_contacts": evaluation["qa_contacts"],
            "approvers": evaluation["approvers"],
        }
        results.append(result)

        if not evaluation["approved"]:
            logger.log("verify_bugs", f"Bug {bug_id} (current status {status}) not approved by QA contact")
            continue
        logger.log("verify_bugs", f"Bug {bug_id} (current status {status}) should be moved to VERIFIED state")
        if on_verified is None:
            continue
        try:
            on_verified(bug, pull)
        except Exception as exc:
            errors.append(VerificationError(f"Unable to update status of bugzilla bug {bug_id}: {exc}", bug_id))
            logger.log("verify_bugs", str(errors[-1]))
    return results, errors


def _parse_args(argv):
    parser = argparse.ArgumentParser(
        description="Check whether each bug's QA contact has /lgtm'd the linked GitHub pull."
    )
    parser.add_argument("bug_ids", nargs="+", metavar="BUG_ID")
    parser.add_argument("--config", default=None, help="Path to the YAML config")
    parser.add_argument("--log-path", default=None, help="Path to the event log file")
    parser.add_argument(
        "--mark-verified",
        action="store_true",
        help="Move approved bugs to VERIFIED in Bugzilla",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv)
    logger = EventLogger(args.log_path)
    try:
        config = load_config(args.config, logger=logger)
    except ConfigLoadError as exc:
        print(f"Config load failed: {exc}")
        return 2

    github_headers, bugzilla_headers = _auth_headers()
    on_verified = None
    if args.mark_verified:
        bugzilla_api = config["bugzilla"]["api_base"]

        def on_verified(bug, pull):
            mark_bug_verified(bugzilla_api, bug.get("id"), headers=bugzilla_headers, logger=logger)

    logger.log("verify_bugs", f"start bugs={','.join(str(b) for b in args.bug_ids)}")
    results, errors = verify_bugs(
        args.bug_ids,
        config,
        github_headers=github_headers,
        bugzilla_headers=bugzilla_headers,
        logger=logger,
        on_verified=on_verified,
    )
    logger.log("verify_bugs", f"end evaluated={len(results)} errors={len(errors)}")
    for result in results:
        print(verification_report(result))
    for err in errors:
        print(f"ERROR {err}")
    return 1 if errors else 0


if __name__ == "__main__":
    sys.exit(main())
