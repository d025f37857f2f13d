"""
Deck source backed by the Riot Games API.

A summoner's deck is their champion mastery list: one (champion_id,
champion_level) pair per champion they have played.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import requests

from riftclash.core.constants import MAX_MASTERY_LEVEL
from riftclash.core.errors import ErrorCode, SelectionFailure

logger = logging.getLogger(__name__)


@dataclass
class FetchedDeck:
    """Deck pool plus decorative profile data."""

    pairs: List[Tuple[int, int]]
    display_name: str
    icon_id: Optional[int] = None


class RiotDeckSource:
    """
    Fetch decks from the Riot API.

    Blocking; the match service runs fetches in a worker thread.
    """

    SUMMONER_PATH = "/lol/summoner/v4/summoners/by-name/{name}"
    MASTERY_PATH = "/lol/champion-mastery/v4/champion-masteries/by-puuid/{puuid}"

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_deck(self, summoner_name: str) -> FetchedDeck:
        """
        Look up a summoner and build their deck from champion mastery.

        Args:
            summoner_name: Summoner name; spaces are ignored.

        Returns:
            FetchedDeck with the mastery pairs.

        Raises:
            SelectionFailure: If the summoner is unknown or the API fails.
        """
        name = summoner_name.replace(" ", "")
        if not name:
            raise SelectionFailure(ErrorCode.DECK_FETCH_FAILED, "A summoner name is required.")

        summoner = self._get(self.SUMMONER_PATH.format(name=name))
        if not summoner or "puuid" not in summoner:
            raise SelectionFailure(
                ErrorCode.DECK_FETCH_FAILED, "Could not find summoner with the given name."
            )

        masteries = self._get(self.MASTERY_PATH.format(puuid=summoner["puuid"])) or []
        pairs = [
            (int(m["championId"]), min(int(m.get("championLevel", 0)), MAX_MASTERY_LEVEL))
            for m in masteries
            if "championId" in m
        ]
        logger.info("Fetched %d mastery entries for %s", len(pairs), name)

        return FetchedDeck(
            pairs=pairs,
            display_name=summoner.get("name", summoner_name),
            icon_id=summoner.get("profileIconId"),
        )

    def _get(self, path: str):
        headers = {"X-Riot-Token": self.api_key} if self.api_key else {}
        try:
            response = self.session.get(
                self.base_url + path, headers=headers, timeout=self.timeout
            )
        except requests.RequestException as exc:
            logger.warning("Riot API request failed: %s", exc)
            raise SelectionFailure(
                ErrorCode.DECK_FETCH_FAILED, "Could not connect to League of Legends server."
            ) from exc

        if response.status_code == 404:
            return None
        if not response.ok:
            logger.warning("Riot API returned %d for %s", response.status_code, path)
            raise SelectionFailure(ErrorCode.DECK_FETCH_FAILED, "Failed to load deck.")

        try:
            return response.json()
        except ValueError as exc:
            raise SelectionFailure(ErrorCode.DECK_FETCH_FAILED, "Failed to load deck.") from exc
