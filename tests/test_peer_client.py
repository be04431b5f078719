"""Peer protocol client against a board served through Flask's test client."""

from __future__ import annotations

import pytest
import requests

from seabattle.coord_utils import Position
from seabattle.peer_client import (
    MSG_BOARD_FAILED,
    MSG_HIT,
    MSG_MISS,
    MSG_OPPONENT_LEFT,
    MSG_WIN,
    PeerClient,
    PeerResponseError,
    PeerUnreachableError,
    ShotResult,
)


@pytest.fixture
def messages() -> list[str]:
    return []


@pytest.fixture
def acks() -> list[int]:
    return []


@pytest.fixture
def peer(peer_http, stats, messages, acks) -> PeerClient:
    return PeerClient(
        "opponent",
        9999,
        stats=stats,
        notify=messages.append,
        acknowledge=lambda: acks.append(1),
        session=peer_http,
        board_timeout=2,
        hit_timeout=5,
    )


def test_miss(peer, stats, messages, peer_http):
    assert peer.fire(Position(5, 5)) is ShotResult.MISS
    assert messages == [MSG_MISS]
    assert (stats.shots_hit, stats.shots_missed) == (0, 1)
    # No alive-count follow-up after a miss
    assert [path for _, path, _ in peer_http.calls] == ["/hit"]


def test_hit_queries_alive_boats(peer, stats, messages, peer_http):
    assert peer.fire(Position(1, 1)) is ShotResult.HIT
    assert messages == [MSG_HIT]
    assert stats.shots_hit == 1
    assert [(m, p) for m, p, _ in peer_http.calls] == [("POST", "/hit"), ("GET", "/boats")]


def test_shot_deadline_longer_than_board_deadline(peer, peer_http):
    peer.fire(Position(1, 1))
    peer.fetch_board()
    timeouts = {path: t for _, path, t in peer_http.calls}
    assert timeouts["/hit"] == 5
    assert timeouts["/boats"] == 5
    assert timeouts["/board"] == 2
    assert timeouts["/board"] < timeouts["/hit"]


def test_sinking_the_whole_fleet_wins_once(peer, session, stats, messages, acks, fleet):
    results = [peer.fire(pos) for boat in fleet for pos in boat.positions]
    assert results[-1] is ShotResult.WIN
    assert all(r is ShotResult.HIT for r in results[:-1])
    assert session.board.alive_boat_count() == 0
    assert messages.count(MSG_WIN) == 1
    assert acks == [1]
    assert stats.games_won == 1

    # Further hits on a dead fleet never notify a second win
    assert peer.fire(fleet[0].positions[0]) is ShotResult.WIN
    assert messages.count(MSG_WIN) == 1
    assert stats.games_won == 1
    assert peer.won

    peer.new_game()
    assert not peer.won


def test_unreachable_peer_on_hit(peer, peer_http, stats, messages, session):
    peer_http.fail["/hit"] = requests.ConnectionError("refused")
    assert peer.fire(Position(1, 1)) is ShotResult.FAILED
    assert messages == [MSG_OPPONENT_LEFT]
    assert (stats.shots_hit, stats.shots_missed) == (0, 0)
    assert session.board.shots == []


def test_timeout_on_hit_is_reported_as_left(peer, peer_http, messages):
    peer_http.fail["/hit"] = requests.Timeout("too slow")
    assert peer.fire(Position(1, 1)) is ShotResult.FAILED
    assert messages == [MSG_OPPONENT_LEFT]


def test_alive_count_failure_is_raised(peer, peer_http, stats):
    peer_http.fail["/boats"] = requests.ConnectionError("gone")
    with pytest.raises(PeerUnreachableError):
        peer.fire(Position(1, 1))
    assert stats.shots_hit == 1
    assert stats.games_won == 0


@pytest.mark.parametrize("body", [b"maybe\n", b"true", b"\xff\xfe"])
def test_unreadable_hit_answer_is_raised(peer, peer_http, stats, body):
    peer_http.override["/hit"] = (200, body)
    with pytest.raises(PeerResponseError):
        peer.fire(Position(1, 1))
    assert (stats.shots_hit, stats.shots_missed) == (0, 0)


def test_http_error_status_is_raised(peer, peer_http):
    peer_http.override["/hit"] = (500, b"boom")
    with pytest.raises(PeerResponseError):
        peer.submit_shot(Position(1, 1))


@pytest.mark.parametrize("body", [b"lots", b"-1", b""])
def test_bad_alive_count(peer, peer_http, body):
    peer_http.override["/boats"] = (200, body)
    with pytest.raises(PeerResponseError):
        peer.alive_boats()


def test_alive_boats(peer):
    assert peer.alive_boats() == 5


def test_fetch_board(peer):
    text = peer.fetch_board()
    assert text is not None
    assert "Bring it on" in text


def test_fetch_board_failure_is_non_fatal(peer, peer_http, messages):
    peer_http.fail["/board"] = requests.Timeout("slow")
    assert peer.fetch_board() is None
    assert messages == [MSG_BOARD_FAILED]


def test_fetch_board_unreadable_body_is_non_fatal(peer, peer_http, messages):
    peer_http.override["/board"] = (200, b"\xff\xfe\xfd")
    assert peer.fetch_board() is None
    assert messages == [MSG_BOARD_FAILED]
