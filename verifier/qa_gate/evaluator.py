import enum
import re

from verifier.qa_gate.events import (
    REVIEW_APPROVED,
    REVIEW_CHANGES_REQUESTED,
    comment_event,
    review_event,
)
from verifier.qa_gate.logger import NullLogger

# Posted by the CI robot when a QA contact is assigned to the pull.
QA_ASSIGN_RE = re.compile(r"Requesting review from QA contact:\s+/cc @[A-Za-z0-9]+", re.ASCII)
LGTM_RE = re.compile(r"^/lgtm(?: no-issue)?\s*$", re.MULTILINE | re.IGNORECASE)
LGTM_CANCEL_RE = re.compile(r"^/lgtm cancel\s*$", re.MULTILINE | re.IGNORECASE)


class CommentKind(enum.Enum):
    APPROVE = "approve"
    CANCEL = "cancel"
    ASSIGNMENT = "assignment"
    NONE = "none"


def classify_comment(body):
    """Classify comment text; the first matching kind wins.

    Precedence: APPROVE, CANCEL, ASSIGNMENT, NONE.
    """
    text = body or ""
    if LGTM_RE.search(text):
        return CommentKind.APPROVE
    if LGTM_CANCEL_RE.search(text):
        return CommentKind.CANCEL
    if QA_ASSIGN_RE.search(text):
        return CommentKind.ASSIGNMENT
    return CommentKind.NONE


class ApprovalSet:
    """Insertion-ordered set of logins with an active /lgtm."""

    def __init__(self, logins=()):
        self._logins = {}
        for login in logins:
            self.add(login)

    def add(self, login):
        self._logins.setdefault(login, None)

    def discard(self, login):
        self._logins.pop(login, None)

    def __contains__(self, login):
        return login in self._logins

    def __iter__(self):
        return iter(self._logins)

    def __len__(self):
        return len(self._logins)

    def __eq__(self, other):
        if isinstance(other, ApprovalSet):
            return list(self) == list(other)
        if isinstance(other, (set, frozenset)):
            return set(self._logins) == other
        return NotImplemented

    def __repr__(self):
        return f"ApprovalSet({list(self._logins)!r})"


def extract_qa_contact(body):
    match = QA_ASSIGN_RE.search(body or "")
    if not match:
        return None
    parts = match.group(0).split("@")
    if len(parts) != 2:
        return None
    return parts[1]


def extract_qa_contacts(comments):
    contacts = set()
    for raw in comments:
        event = comment_event(raw)
        if classify_comment(event.body) is not CommentKind.ASSIGNMENT:
            continue
        contact = extract_qa_contact(event.body)
        if contact:
            contacts.add(contact)
    return contacts


def _apply_comment(approvals, event):
    kind = classify_comment(event.body)
    if kind is CommentKind.APPROVE:
        approvals.add(event.author)
    elif kind is CommentKind.CANCEL:
        approvals.discard(event.author)


def _apply_review(approvals, event):
    if event.review_state == REVIEW_APPROVED:
        approvals.add(event.author)
        return
    if event.review_state == REVIEW_CHANGES_REQUESTED:
        approvals.discard(event.author)
        return
    kind = classify_comment(event.body)
    if kind is CommentKind.APPROVE:
        approvals.add(event.author)
    elif kind is CommentKind.CANCEL:
        approvals.discard(event.author)


def track_approvals(comments, reviews=()):
    approvals = ApprovalSet()
    for raw in comments:
        event = comment_event(raw)
        if event.author:
            _apply_comment(approvals, event)
    for raw in reviews or ():
        event = review_event(raw)
        if event.author:
            _apply_review(approvals, event)
    return approvals


def evaluate_pull(comments, reviews=(), logger=None):
    logger = logger or NullLogger()
    comments = list(comments or ())
    qa_contacts = extract_qa_contacts(comments)
    approvals = track_approvals(comments, reviews)
    matched = sorted(contact for contact in qa_contacts if contact in approvals)
    for contact in matched:
        logger.log("evaluate_pull", f"QA contact {contact} lgtm'd this PR")
    return {
        "approved": bool(matched),
        "qa_contacts": sorted(qa_contacts),
        "approvers": list(approvals),
        "matched_contacts": matched,
    }


def pr_reviewed_by_qa(comments, reviews=(), logger=None):
    return evaluate_pull(comments, reviews, logger=logger)["approved"]
