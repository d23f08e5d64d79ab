from attendance_pro.clarification import ClarificationTracker


def test_open_requests_creates_one_pending_per_uncertainty():
    tracker = ClarificationTracker()
    context = {"text": "Ravi 800?", "images": []}

    opened = tracker.open_requests(["Which site?", "Rate 800 or 850?"], context)

    assert [r.content for r in opened] == ["Which site?", "Rate 800 or 850?"]
    assert all(r.status == "pending" for r in opened)
    assert all(r.context == context for r in opened)
    assert tracker.pending_count == 2


def test_resolve_creates_rule_and_removes_request():
    tracker = ClarificationTracker()
    request = tracker.open_requests(["Is Ravi's rate 800 or 850?"])[0]

    rule = tracker.resolve(request.id, "Always 800 unless stated")

    assert rule.pattern == "Is Ravi's rate 800 or 850?"
    assert rule.explanation == "Always 800 unless stated"
    assert rule.created_at > 0
    assert tracker.pending == []
    assert tracker.rules == [rule]
    assert request.status == "resolved"


def test_resolve_unknown_id_is_a_noop():
    tracker = ClarificationTracker()
    tracker.open_requests(["Which site?"])

    assert tracker.resolve("missing", "whatever") is None
    assert tracker.pending_count == 1
    assert tracker.rules == []


def test_resolving_twice_only_creates_one_rule():
    tracker = ClarificationTracker()
    request = tracker.open_requests(["Which site?"])[0]

    tracker.resolve(request.id, "Site A")
    assert tracker.resolve(request.id, "Site B") is None
    assert len(tracker.rules) == 1


def test_similar_patterns_are_not_merged():
    tracker = ClarificationTracker()
    first, second = tracker.open_requests(["Which site?", "Which site?"])

    tracker.resolve(first.id, "Site A")
    tracker.resolve(second.id, "Site B")

    assert [r.explanation for r in tracker.rules] == ["Site A", "Site B"]


def test_remove_rule():
    tracker = ClarificationTracker()
    request = tracker.open_requests(["HD?"])[0]
    rule = tracker.resolve(request.id, "HD means half day")

    assert tracker.remove_rule("missing") is False
    assert tracker.remove_rule(rule.id) is True
    assert tracker.rules == []


def test_rules_for_prompt_keep_creation_order():
    tracker = ClarificationTracker()
    for question, answer in [("HD?", "half day"), ("FD?", "full day")]:
        request = tracker.open_requests([question])[0]
        tracker.resolve(request.id, answer)

    assert tracker.rules_for_prompt() == [
        {"pattern": "HD?", "explanation": "half day"},
        {"pattern": "FD?", "explanation": "full day"},
    ]


def test_exposed_collections_are_copies():
    tracker = ClarificationTracker()
    tracker.open_requests(["Which site?"])

    tracker.pending.clear()
    tracker.rules.append("junk")

    assert tracker.pending_count == 1
    assert tracker.rules == []
