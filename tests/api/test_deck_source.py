"""Tests for the Riot API deck source."""

from unittest.mock import MagicMock

import pytest
import requests

from riftclash.api.services.deck_source import RiotDeckSource
from riftclash.core.constants import MAX_MASTERY_LEVEL
from riftclash.core.errors import ErrorCode, SelectionFailure


def response(status_code=200, payload=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.json.return_value = payload
    return resp


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def source(session):
    return RiotDeckSource("https://example.test/", api_key="key", session=session)


class TestRiotDeckSource:
    def test_fetch_deck(self, source, session):
        session.get.side_effect = [
            response(payload={"puuid": "p-1", "name": "Faker", "profileIconId": 6}),
            response(payload=[
                {"championId": 86, "championLevel": 7},
                {"championId": 1, "championLevel": 3},
            ]),
        ]

        deck = source.fetch_deck("Fa ker")

        assert deck.pairs == [(86, 7), (1, 3)]
        assert deck.display_name == "Faker"
        assert deck.icon_id == 6
        first_url = session.get.call_args_list[0].args[0]
        assert first_url == "https://example.test/lol/summoner/v4/summoners/by-name/Faker"
        assert session.get.call_args_list[0].kwargs["headers"] == {"X-Riot-Token": "key"}

    def test_unknown_summoner(self, source, session):
        session.get.return_value = response(404)

        with pytest.raises(SelectionFailure) as exc:
            source.fetch_deck("nobody")
        assert exc.value.code == ErrorCode.DECK_FETCH_FAILED
        assert exc.value.message == "Could not find summoner with the given name."

    def test_connection_error(self, source, session):
        session.get.side_effect = requests.ConnectionError("down")

        with pytest.raises(SelectionFailure) as exc:
            source.fetch_deck("Faker")
        assert exc.value.message == "Could not connect to League of Legends server."

    def test_server_error(self, source, session):
        session.get.return_value = response(500)

        with pytest.raises(SelectionFailure) as exc:
            source.fetch_deck("Faker")
        assert exc.value.message == "Failed to load deck."

    def test_blank_name(self, source, session):
        with pytest.raises(SelectionFailure):
            source.fetch_deck("   ")
        session.get.assert_not_called()

    def test_levels_capped_at_highest_mastery(self, source, session):
        session.get.side_effect = [
            response(payload={"puuid": "p-1", "name": "Faker"}),
            response(payload=[{"championId": 86, "championLevel": 42}]),
        ]

        deck = source.fetch_deck("Faker")

        assert deck.pairs == [(86, MAX_MASTERY_LEVEL)]
