# tests/unit/test_visited_set.py
from gtree.domain.models import Identity
from gtree.services.visited import VisitedSet


def test_insert_reports_first_visit_only():
    v = VisitedSet()
    assert v.insert_if_absent(Identity(1, 42)) is True
    assert v.insert_if_absent(Identity(1, 42)) is False
    assert len(v) == 1


def test_identity_requires_exact_match_on_both_fields():
    v = VisitedSet()
    v.insert_if_absent(Identity(1, 42))
    assert v.contains(Identity(1, 42))
    assert not v.contains(Identity(2, 42))
    assert not v.contains(Identity(1, 43))
    assert Identity(1, 42) in v


def test_large_identities_do_not_collide():
    v = VisitedSet()
    big = 2**63
    for dev, ino in [(big, 1), (1, big), (big, big), (big + 1, big - 1)]:
        assert v.insert_if_absent(Identity(dev, ino))
    assert len(v) == 4
