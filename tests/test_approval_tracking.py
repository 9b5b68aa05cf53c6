from verifier.qa_gate.evaluator import ApprovalSet, track_approvals


def _comment(login, body):
    return {"user": {"login": login}, "body": body}


def test_approve_cancel_approve_leaves_single_approval():
    comments = [
        _comment("alice", "/lgtm"),
        _comment("alice", "/lgtm cancel"),
        _comment("alice", "/lgtm"),
    ]
    approvals = track_approvals(comments)
    assert list(approvals) == ["alice"]


def test_cancel_without_prior_approval_is_noop():
    approvals = track_approvals([_comment("alice", "/lgtm cancel")])
    assert len(approvals) == 0


def test_repeated_approve_is_idempotent():
    approvals = track_approvals([_comment("alice", "/lgtm"), _comment("alice", "/lgtm")])
    assert len(approvals) == 1
    assert "alice" in approvals


def test_cancel_only_removes_commenter():
    comments = [
        _comment("alice", "/lgtm"),
        _comment("bob", "/lgtm"),
        _comment("bob", "/lgtm cancel"),
    ]
    assert list(track_approvals(comments)) == ["alice"]


def test_unrecognized_and_anonymous_comments_are_inert():
    comments = [
        _comment("alice", "lgtm"),
        {"body": "/lgtm"},
        {"user": None, "body": None},
        _comment("bob", "Requesting review from QA contact:\n/cc @bob"),
    ]
    assert len(track_approvals(comments)) == 0


def test_approval_set_keeps_insertion_order_without_duplicates():
    approvals = ApprovalSet(["bob", "alice", "bob"])
    assert list(approvals) == ["bob", "alice"]
    approvals.discard("bob")
    approvals.discard("carol")
    approvals.add("bob")
    assert list(approvals) == ["alice", "bob"]
    assert approvals == {"alice", "bob"}
