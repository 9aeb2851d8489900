# [TESTER] v1

from __future__ import annotations

import threading
import time

import pytest

from mmvault.core.guard import ReentrancyGuard
from mmvault.errors import ReentrantError


def test_guard_rejects_same_thread_reentry_and_releases() -> None:
    guard = ReentrancyGuard()
    with guard:
        assert guard.entered
        with pytest.raises(ReentrantError):
            with guard:
                pass
        assert guard.entered
    assert not guard.entered
    with guard:
        pass


def test_guard_releases_on_failure() -> None:
    guard = ReentrancyGuard()
    with pytest.raises(RuntimeError):
        with guard:
            raise RuntimeError("boom")
    assert not guard.entered


def test_guard_serializes_threads() -> None:
    guard = ReentrancyGuard()
    active = []
    overlaps = []

    def worker() -> None:
        with guard:
            active.append(1)
            if len(active) > 1:
                overlaps.append(True)
            time.sleep(0.01)
            active.pop()

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert overlaps == []


def test_joined_reuses_own_hold_and_blocks_other_threads() -> None:
    guard = ReentrancyGuard()
    with guard:
        with guard.joined():
            assert guard.held_by_current_thread()
        assert guard.entered

        acquired = threading.Event()

        def other() -> None:
            with guard.joined():
                acquired.set()

        t = threading.Thread(target=other)
        t.start()
        time.sleep(0.05)
        assert not acquired.is_set()
    t.join(timeout=5)
    assert acquired.is_set()
    assert not guard.entered


def test_callback_during_payout_cannot_reenter(seeded_vault) -> None:
    v = seeded_vault
    v.fund(v.alice, 100_000, 100_000)
    observed = {}

    def on_receive(sender, legs) -> None:
        # Reserves and shares are already final when control leaves the pool.
        observed["reserves"] = v.pool.get_reserves()
        observed["shares"] = v.pool.share_balance_of(v.alice)
        for attempt in (
            lambda: v.pool.withdraw(v.alice, 1_000),
            lambda: v.pool.deposit(v.alice, 100_000, 100_000),
        ):
            try:
                attempt()
            except ReentrantError:
                observed.setdefault("rejected", 0)
                observed["rejected"] += 1

    v.custody.set_receive_hook(v.alice, on_receive)
    base_out, quote_out = v.pool.withdraw(v.alice, 500_000)

    assert (base_out, quote_out) == (500_000, 500_000)
    assert observed == {"reserves": (500_000, 500_000), "shares": 499_000, "rejected": 2}
    assert v.pool.get_reserves() == (500_000, 500_000)
    assert v.pool.share_balance_of(v.alice) == 499_000
    assert v.wallet(v.alice) == (600_000, 600_000)
    assert len(v.pool.events) == 2


def test_uncaught_reentry_reverts_the_outer_withdrawal(seeded_vault) -> None:
    v = seeded_vault

    def on_receive(sender, legs) -> None:
        v.pool.withdraw(v.alice, 1_000)

    v.custody.set_receive_hook(v.alice, on_receive)
    with pytest.raises(ReentrantError):
        v.pool.withdraw(v.alice, 500_000)

    assert v.pool.get_reserves() == (1_000_000, 1_000_000)
    assert v.held_by_pool() == (1_000_000, 1_000_000)
    assert v.pool.share_balance_of(v.alice) == 999_000
    assert v.wallet(v.alice) == (0, 0)


def test_concurrent_deposits_do_not_interleave(seeded_vault) -> None:
    v = seeded_vault
    depositors = ["0x" + f"{i:02x}" * 20 for i in range(16, 24)]
    for account in depositors:
        v.fund(account, 10_000, 10_000)

    threads = [threading.Thread(target=v.pool.deposit, args=(a, 10_000, 10_000)) for a in depositors]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert v.pool.get_reserves() == (1_080_000, 1_080_000)
    assert v.pool.total_shares() == 1_080_000
    assert v.held_by_pool() == v.pool.get_reserves()
