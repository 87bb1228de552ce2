"""Tests for chat_commands.extraction.correlation: count/duration pairing and duel streaks."""

from chat_commands.extraction.correlation import (
    DUEL_LOSE_STREAK,
    DUEL_LOSSES,
    DUEL_WIN_STREAK,
    DUEL_WINS,
    EMPTY_STATE,
    CorrelationState,
    consume,
)
from chat_commands.extraction.patterns import (
    NO_MATCH,
    DuelLoss,
    DuelWin,
    Duration,
    FixedCount,
    KillCount,
    extract,
)

PLAYER = "Zezima"


def feed(store, lines, state=EMPTY_STATE):
    for line in lines:
        state = consume(state, extract(line), store, PLAYER)
    return state


class TestKillCountFirst:
    def test_count_then_new_best(self, store):
        state = feed(store, [
            "Your Zulrah kill count is: <col=ff0000>42</col>.",
            "Fight duration: <col=ff0000>2:30</col> (new personal best)",
        ])
        assert store.get_kc(PLAYER, "Zulrah") == 42
        assert store.get_pb(PLAYER, "Zulrah") == 150
        assert state == EMPTY_STATE

    def test_count_remembers_subject(self, store):
        state = consume(EMPTY_STATE, KillCount(subject="Zulrah", count=42), store, PLAYER)
        assert state.pending_subject == "Zulrah"
        assert state.pending_value is None

    def test_unrelated_line_closes_the_window(self, store):
        state = feed(store, [
            "Your Zulrah kill count is: <col=ff0000>42</col>.",
            "You have a funny feeling like you're being followed.",
            "Fight duration: <col=ff0000>2:30</col> (new personal best)",
        ])
        assert store.get_pb(PLAYER, "Zulrah") == 0
        # The orphaned duration now waits for the next count
        assert state.pending_value == 150

    def test_newer_count_replaces_pending_subject(self, store):
        state = consume(EMPTY_STATE, KillCount(subject="Zulrah", count=1), store, PLAYER)
        state = consume(state, KillCount(subject="Vorkath", count=2), store, PLAYER)
        state = consume(state, Duration(seconds=90, is_new_best=True), store, PLAYER)
        assert store.get_pb(PLAYER, "Vorkath") == 90
        assert store.get_pb(PLAYER, "Zulrah") == 0


class TestDurationFirst:
    def test_duration_then_count(self, store):
        state = feed(store, [
            "Challenge duration: <col=ff0000>5:12</col>. Personal best: 4:58",
            "Your completed Theatre of Blood count is: <col=ff0000>7</col>.",
        ])
        assert store.get_kc(PLAYER, "Theatre of Blood") == 7
        assert store.get_pb(PLAYER, "Theatre of Blood") == 298
        assert state == EMPTY_STATE

    def test_pending_duration_survives_unrelated_lines(self, store):
        state = feed(store, [
            "Challenge duration: <col=ff0000>5:12</col>. Personal best: 4:58",
            "Welcome to Old School RuneScape.",
            "You have now lost 2 duels.",
            "Your Barrows chest count is: <col=ff0000>55</col>.",
            "Your completed Theatre of Blood count is: <col=ff0000>7</col>.",
        ])
        assert store.get_pb(PLAYER, "Theatre of Blood") == 298
        assert store.get_pb(PLAYER, "Barrows Chests") == 0
        assert state == EMPTY_STATE

    def test_newer_duration_replaces_pending_value(self, store):
        state = consume(EMPTY_STATE, Duration(seconds=100, is_new_best=False), store, PLAYER)
        state = consume(state, Duration(seconds=80, is_new_best=True), store, PLAYER)
        assert state == CorrelationState(pending_value=80)


class TestOtherResults:
    def test_fixed_count_writes_without_pairing(self, store):
        state = consume(
            CorrelationState(pending_subject="Zulrah"),
            FixedCount(subject="Wintertodt", count=120), store, PLAYER,
        )
        assert store.get_kc(PLAYER, "Wintertodt") == 120
        assert state.pending_subject is None

    def test_no_match_keeps_pending_value(self, store):
        state = consume(CorrelationState(pending_value=60), NO_MATCH, store, PLAYER)
        assert state == CorrelationState(pending_value=60)

    def test_state_is_not_mutated(self, store):
        before = CorrelationState(pending_subject="Zulrah")
        consume(before, Duration(seconds=150, is_new_best=True), store, PLAYER)
        assert before.pending_subject == "Zulrah"


class TestDuelStreaks:
    def test_first_win(self, store):
        consume(EMPTY_STATE, DuelWin(outcome="won", count=1), store, PLAYER)
        assert store.get_kc(PLAYER, DUEL_WINS) == 1
        assert store.get_kc(PLAYER, DUEL_WIN_STREAK) == 1
        assert store.get_kc(PLAYER, DUEL_LOSE_STREAK) == 0

    def test_wins_then_defeat(self, store):
        feed(store, [
            "You won! You have won 1 duel.",
            "You won! You have now won 2 duels.",
            "You won! You have now won 3 duels.",
        ])
        assert store.get_kc(PLAYER, DUEL_WIN_STREAK) == 3
        feed(store, ["You were defeated! You have won 3 duels."])
        assert store.get_kc(PLAYER, DUEL_WINS) == 3
        assert store.get_kc(PLAYER, DUEL_WIN_STREAK) == 0
        assert store.get_kc(PLAYER, DUEL_LOSE_STREAK) == 1

    def test_repeated_win_count_leaves_streaks(self, store):
        store.set_kc(PLAYER, DUEL_WINS, 5)
        store.set_kc(PLAYER, DUEL_WIN_STREAK, 2)
        consume(EMPTY_STATE, DuelWin(outcome="won", count=5), store, PLAYER)
        assert store.get_kc(PLAYER, DUEL_WIN_STREAK) == 2

    def test_losses(self, store):
        consume(EMPTY_STATE, DuelLoss(count=4), store, PLAYER)
        assert store.get_kc(PLAYER, DUEL_LOSSES) == 4
