from verifier.qa_gate.evaluator import track_approvals


def _comment(login, body):
    return {"user": {"login": login}, "body": body}


def _review(login, state, body=""):
    return {"user": {"login": login, "type": "User"}, "state": state, "body": body}


def test_approved_review_adds_reviewer():
    approvals = track_approvals([], [_review("alice", "APPROVED")])
    assert list(approvals) == ["alice"]


def test_commented_review_with_lgtm_body_adds_reviewer():
    approvals = track_approvals([], [_review("alice", "COMMENTED", "/lgtm")])
    assert list(approvals) == ["alice"]


def test_changes_requested_removes_comment_approval():
    approvals = track_approvals(
        [_comment("alice", "/lgtm")],
        [_review("alice", "CHANGES_REQUESTED", "needs work")],
    )
    assert len(approvals) == 0


def test_changes_requested_removes_regardless_of_body():
    approvals = track_approvals(
        [_comment("alice", "/lgtm")],
        [_review("alice", "CHANGES_REQUESTED", "/lgtm")],
    )
    assert "alice" not in approvals


def test_review_cancel_body_removes_approval():
    approvals = track_approvals(
        [_comment("alice", "/lgtm")],
        [_review("alice", "COMMENTED", "/lgtm cancel")],
    )
    assert len(approvals) == 0


def test_reviews_replay_after_comments():
    approvals = track_approvals(
        [_comment("alice", "/lgtm cancel")],
        [_review("alice", "APPROVED")],
    )
    assert list(approvals) == ["alice"]


def test_other_states_are_ignored():
    approvals = track_approvals(
        [_comment("alice", "/lgtm")],
        [_review("alice", "DISMISSED", "meh"), _review("bob", "PENDING")],
    )
    assert list(approvals) == ["alice"]
