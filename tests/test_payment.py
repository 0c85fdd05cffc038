"""Tests for payment reconciliation and who may steer a journey."""

from discord_dungeon.classes.authorization import is_authorized
from discord_dungeon.classes.identity import Identity
from discord_dungeon.classes.payment import PaymentOutcome, reconcile
from discord_dungeon.classes.session_repository import Session


# ── reconcile ──────────────────────────────────────────────


def test_underpayment_does_not_activate():
    outcome = reconcile(5, 3)
    assert outcome is PaymentOutcome.UNDER
    assert not outcome.activates


def test_exact_payment_activates():
    outcome = reconcile(5, 5)
    assert outcome is PaymentOutcome.EXACT
    assert outcome.activates


def test_overpayment_activates():
    outcome = reconcile(5, 8)
    assert outcome is PaymentOutcome.OVER
    assert outcome.activates


def test_free_journey():
    assert reconcile(0, 0) is PaymentOutcome.EXACT


# ── is_authorized ──────────────────────────────────────────


def _session():
    return Session(
        record_id=1,
        thread_key="1000",
        creator=Identity("101", "Ada"),
        companions=[Identity("102", "Grace")],
        cost_gp=5,
        prompt="You wake up.",
    )


def test_creator_and_companions_are_authorized():
    session = _session()
    assert is_authorized(session, Identity("101"))
    assert is_authorized(session, Identity("102", "a new nickname"))


def test_strangers_are_not_authorized():
    assert not is_authorized(_session(), Identity("103", "Ada"))
