"""
Testing the game session state machine.
- Buffer editing, guess submission, win/loss, statistics and persistence.
"""

import pytest

from termo.models.errors import GameOver, IncompleteGuess, NotInDictionary
from termo.models.game import GameStatus, LetterStatus
from termo.services.persistence import InMemoryPersistence
from termo.services.session import GameSession, win_message

from conftest import new_snapshot, play, type_word

LOSING_GUESSES = ["PLANET", "SILVER", "BRIDGE", "CANDLE", "FOREST", "ORANGE"]


class RecordingPersistence(InMemoryPersistence):
    def __init__(self):
        super().__init__()
        self.calls = []

    def save_session_state(self, state):
        self.calls.append("session")
        super().save_session_state(state)

    def save_statistics(self, stats):
        self.calls.append("statistics")
        super().save_statistics(stats)


def test_append_and_remove_letters(session):
    assert session.append_letter("g") is True
    assert session.append_letter("A") is True
    assert session.buffer == ["G", "A"]

    assert session.remove_letter() is True
    assert session.buffer == ["G"]


@pytest.mark.parametrize("value", ["", "AB", "1", " ", None, 7])
def test_append_ignores_anything_but_one_letter(session, value):
    assert session.append_letter(value) is False
    assert session.buffer == []


def test_append_beyond_word_length_is_noop(session):
    type_word(session, "GARDEN")
    assert session.append_letter("X") is False
    assert session.buffer == list("GARDEN")


def test_remove_from_empty_buffer_is_noop(session):
    assert session.remove_letter() is False
    assert session.buffer == []


def test_incomplete_guess_leaves_state_unchanged(session):
    type_word(session, "GARD")
    before = session.snapshot()

    with pytest.raises(IncompleteGuess) as excinfo:
        session.submit_guess()

    assert excinfo.value.code == "incomplete_guess"
    assert session.snapshot() == before


def test_unknown_word_leaves_state_unchanged(session):
    type_word(session, "ZZZZZZ")
    before = session.snapshot()

    with pytest.raises(NotInDictionary):
        session.submit_guess()

    assert session.snapshot() == before
    assert session.history == []


def test_garden_scenario_won_on_third_attempt(session):
    outcome = play(session, "PLANET")
    assert outcome.status is GameStatus.IN_PROGRESS
    assert outcome.attempt == 1
    assert outcome.answer is None
    assert len(session.history) == 1
    assert session.buffer == []

    play(session, "SILVER")
    outcome = play(session, "GARDEN")

    assert outcome.status is GameStatus.WON
    assert outcome.record.result == (LetterStatus.CORRECT,) * 6
    assert outcome.message == "Impressionante!"
    assert outcome.answer == "GARDEN"
    assert len(session.history) == 3

    stats = session.statistics
    assert stats.games_played == 1
    assert stats.games_won == 1
    assert stats.current_streak == 1
    assert stats.longest_streak == 1
    assert stats.distribution == [0, 0, 1, 0, 0, 0]


def test_sixth_wrong_guess_loses(session):
    for guess in LOSING_GUESSES[:-1]:
        assert play(session, guess).status is GameStatus.IN_PROGRESS

    outcome = play(session, LOSING_GUESSES[-1])

    assert outcome.status is GameStatus.LOST
    assert outcome.attempt == 6
    assert outcome.answer == "GARDEN"
    assert outcome.message is None
    assert session.statistics.games_played == 1
    assert session.statistics.games_won == 0
    assert session.statistics.distribution == [0] * 6


def test_winning_on_last_attempt_is_a_win(session):
    for guess in LOSING_GUESSES[:-1]:
        play(session, guess)

    outcome = play(session, "GARDEN")
    assert outcome.status is GameStatus.WON
    assert outcome.message == "Ufa!"
    assert session.statistics.distribution == [0, 0, 0, 0, 0, 1]


def test_finished_game_is_frozen(session):
    play(session, "GARDEN")
    before = session.snapshot()

    assert session.append_letter("A") is False
    assert session.remove_letter() is False
    with pytest.raises(GameOver):
        session.submit_guess()

    assert session.snapshot() == before
    assert session.status is GameStatus.WON
    assert session.statistics.games_played == 1


def test_history_never_exceeds_max_attempts(session):
    for guess in LOSING_GUESSES:
        play(session, guess)
    type_word(session, "GARDEN")

    with pytest.raises(GameOver):
        session.submit_guess()
    assert len(session.history) == 6


def test_streaks_across_games(dictionary, persistence):
    game = GameSession(dictionary, persistence)

    for _ in range(2):
        game.restore_from_snapshot(new_snapshot("GARDEN"))
        play(game, "GARDEN")
    game.restore_from_snapshot(new_snapshot("GARDEN"))
    for guess in LOSING_GUESSES:
        play(game, guess)
    game.restore_from_snapshot(new_snapshot("GARDEN"))
    play(game, "PLANET")
    play(game, "GARDEN")

    stats = game.statistics
    assert stats.games_played == 4
    assert stats.games_won == 3
    assert stats.current_streak == 1
    assert stats.longest_streak == 2
    assert stats.distribution == [2, 1, 0, 0, 0, 0]
    assert stats.win_percentage == 75


def test_restoring_finished_game_does_not_touch_statistics(session, persistence):
    play(session, "GARDEN")
    snapshot = session.snapshot()
    stats_before = session.statistics.to_dict()

    assert session.restore_from_snapshot(snapshot) is True
    assert session.restore_from_snapshot(snapshot) is True

    assert session.status is GameStatus.WON
    assert session.statistics.to_dict() == stats_before
    assert persistence.load_statistics() == stats_before


def test_snapshot_round_trip(session):
    play(session, "PLANET")
    type_word(session, "GA")
    snapshot = session.snapshot()

    assert snapshot == new_snapshot("GARDEN", ["PLANET"], ["G", "A"])

    session.restore_from_snapshot(snapshot)
    assert session.snapshot() == snapshot
    assert session.history[0].result == (
        LetterStatus.ABSENT, LetterStatus.ABSENT, LetterStatus.PRESENT,
        LetterStatus.PRESENT, LetterStatus.CORRECT, LetterStatus.ABSENT,
    )


@pytest.mark.parametrize("snapshot", [
    None,
    "GARDEN",
    {},
    new_snapshot("GARDE"),
    new_snapshot("garden"),
    new_snapshot("GARD3N"),
    new_snapshot("GARDEN", status="paused"),
    new_snapshot("GARDEN", guesses=["PLANET"], status="won"),
    new_snapshot("GARDEN", guesses=["GARDEN"], status="in_progress"),
    new_snapshot("GARDEN", guesses=["GARDEN", "PLANET"], status="lost"),
    new_snapshot("GARDEN", guesses=["PLANET"] * 6, status="in_progress"),
    new_snapshot("GARDEN", guesses=["PLANET"] * 7, status="lost"),
    new_snapshot("GARDEN", guesses=["PLAN"], status="in_progress"),
    new_snapshot("GARDEN", buffer=["G"] * 7),
    new_snapshot("GARDEN", buffer=["GA"]),
    new_snapshot("GARDEN", guesses=["GARDEN"], buffer=["A"], status="won"),
    {**new_snapshot("GARDEN"), "word_length": 5},
])
def test_malformed_snapshot_starts_new_game(dictionary, persistence, snapshot):
    game = GameSession(dictionary, persistence)

    assert game.restore_from_snapshot(snapshot) is False

    assert game.status is GameStatus.IN_PROGRESS
    assert game.history == []
    assert game.buffer == []
    assert dictionary.contains(game.state.secret_word)
    assert persistence.load_session_state() == game.snapshot()


def test_load_without_saved_game_starts_new_one(dictionary, persistence):
    game = GameSession(dictionary, persistence)

    assert game.load() is False
    assert game.status is GameStatus.IN_PROGRESS
    assert persistence.load_session_state() == game.snapshot()


def test_load_resumes_saved_game_and_statistics(dictionary, persistence):
    first = GameSession(dictionary, persistence)
    first.restore_from_snapshot(new_snapshot("GARDEN"))
    play(first, "GARDEN")
    first.start_new_game()
    type_word(first, "PLA")

    second = GameSession(dictionary, persistence)
    assert second.load() is True
    assert second.snapshot() == first.snapshot()
    assert second.statistics == first.statistics


def test_load_discards_malformed_statistics(dictionary, persistence):
    persistence.save_statistics({"games_played": -1})
    game = GameSession(dictionary, persistence)

    game.load()

    assert game.statistics.games_played == 0


def test_start_new_game_keeps_statistics(session, dictionary):
    play(session, "GARDEN")
    session.start_new_game()

    assert session.status is GameStatus.IN_PROGRESS
    assert session.history == []
    assert dictionary.contains(session.state.secret_word)
    assert session.statistics.games_won == 1


def test_session_is_saved_before_statistics(dictionary):
    persistence = RecordingPersistence()
    game = GameSession(dictionary, persistence)
    game.restore_from_snapshot(new_snapshot("GARDEN"))
    type_word(game, "GARDEN")
    persistence.calls.clear()

    game.submit_guess()

    assert persistence.calls == ["session", "statistics"]


def test_failed_submission_saves_nothing(dictionary):
    persistence = RecordingPersistence()
    game = GameSession(dictionary, persistence)
    game.restore_from_snapshot(new_snapshot("GARDEN"))
    type_word(game, "ZZZZZZ")
    persistence.calls.clear()

    with pytest.raises(NotInDictionary):
        game.submit_guess()
    assert persistence.calls == []


def test_operations_require_a_loaded_game(dictionary, persistence):
    game = GameSession(dictionary, persistence)
    with pytest.raises(RuntimeError):
        game.append_letter("A")


def test_dictionary_word_length_must_match(dictionary, persistence):
    with pytest.raises(ValueError):
        GameSession(dictionary, persistence, word_length=5)


@pytest.mark.parametrize("attempts, message", [
    (1, "Gênio!"),
    (2, "Magnífico!"),
    (3, "Impressionante!"),
    (4, "Esplêndido!"),
    (5, "Muito bom!"),
    (6, "Ufa!"),
    (7, "Parabéns!"),
    (0, "Parabéns!"),
])
def test_win_message(attempts, message):
    assert win_message(attempts) == message


def test_share_text(session):
    play(session, "PLANET")
    play(session, "GARDEN")

    assert session.share_text() == "Termo Clone 2/6\n\n⬛⬛🟨🟨🟩⬛\n🟩🟩🟩🟩🟩🟩"


def test_share_text_for_lost_game(session):
    for guess in LOSING_GUESSES:
        play(session, guess)

    assert session.share_text().startswith("Termo Clone X/6\n\n")
