from verifier.qa_gate.bugzilla_client import (
    GITHUB_TRACKER_URL,
    BugzillaClientError,
    get_bug,
    get_external_bug_prs,
)
from verifier.qa_gate.config_loader import (
    ConfigLoadError,
    load_config,
    review_acts_as_lgtm,
)
from verifier.qa_gate.evaluator import (
    ApprovalSet,
    CommentKind,
    classify_comment,
    evaluate_pull,
    extract_qa_contacts,
    pr_reviewed_by_qa,
    track_approvals,
)
from verifier.qa_gate.events import (
    Event,
    comment_event,
    review_event,
)
from verifier.qa_gate.github_client import (
    GitHubClientError,
    list_issue_comments,
    list_reviews,
)
from verifier.qa_gate.logger import (
    EventLogger,
    NullLogger,
)
from verifier.qa_gate.report import (
    verification_report,
)
from verifier.qa_gate.status_publisher import (
    StatusPublishError,
    mark_bug_verified,
)

__all__ = [
    "ApprovalSet",
    "BugzillaClientError",
    "CommentKind",
    "ConfigLoadError",
    "Event",
    "EventLogger",
    "GITHUB_TRACKER_URL",
    "GitHubClientError",
    "NullLogger",
    "StatusPublishError",
    "classify_comment",
    "comment_event",
    "evaluate_pull",
    "extract_qa_contacts",
    "get_bug",
    "get_external_bug_prs",
    "list_issue_comments",
    "list_reviews",
    "load_config",
    "mark_bug_verified",
    "pr_reviewed_by_qa",
    "review_acts_as_lgtm",
    "review_event",
    "track_approvals",
    "verification_report",
]
