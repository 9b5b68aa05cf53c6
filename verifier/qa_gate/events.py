import dataclasses

COMMENT = "comment"
REVIEW = "review"

REVIEW_APPROVED = "approved"
REVIEW_CHANGES_REQUESTED = "changes_requested"
REVIEW_COMMENTED = "commented"
REVIEW_OTHER = "other"

_REVIEW_STATES = {
    "APPROVED": REVIEW_APPROVED,
    "CHANGES_REQUESTED": REVIEW_CHANGES_REQUESTED,
    "COMMENTED": REVIEW_COMMENTED,
}


@dataclasses.dataclass(frozen=True)
class Event:
    author: str
    body: str
    kind: str
    review_state: str | None = None


def _login(raw):
    return ((raw.get("user") or {}).get("login") or "").strip()


def normalize_review_state(state):
    return _REVIEW_STATES.get(str(state or "").strip().upper(), REVIEW_OTHER)


def comment_event(raw):
    if isinstance(raw, Event):
        return raw
    return Event(author=_login(raw), body=raw.get("body") or "", kind=COMMENT)


def review_event(raw):
    if isinstance(raw, Event):
        return raw
    return Event(
        author=_login(raw),
        body=raw.get("body") or "",
        kind=REVIEW,
        review_state=normalize_review_state(raw.get("state")),
    )
