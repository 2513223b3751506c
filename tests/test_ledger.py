"""Tests for the in-memory rewards ledger."""

from questboard.engine.ledger import InMemoryRewardsLedger


def test_award_credits_gold_and_orbs():
    ledger = InMemoryRewardsLedger()

    result = ledger.award("p1", 150)

    assert result.success
    assert result.gold_awarded == 150
    assert result.orbs_awarded == 2
    assert ledger.gold == {"p1": 150}
    assert ledger.orbs == {"p1": 2}


def test_awards_accumulate():
    ledger = InMemoryRewardsLedger()
    ledger.award("p1", 100, orbs_to_award=1)
    ledger.award("p1", 50, orbs_to_award=3)

    assert ledger.gold["p1"] == 150
    assert ledger.orbs["p1"] == 4
    assert len(ledger.entries) == 2


def test_negative_amounts_fail():
    ledger = InMemoryRewardsLedger()

    result = ledger.award("p1", -5)

    assert not result.success
    assert ledger.entries == []
