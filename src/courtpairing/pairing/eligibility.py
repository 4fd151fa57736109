"""Eligible roster and match capacity for a round."""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from courtpairing.constants import PLAYERS_PER_MATCH, PLAYERS_PER_TEAM, TEAMS_PER_MATCH
from courtpairing.models.game_config import GameConfig, GenderMode
from courtpairing.models.participant import FixedTeam, Gender, Participant


def gender_allowed(gender: Gender, gender_mode: GenderMode) -> bool:
    """Return whether a player of ``gender`` may play under ``gender_mode``."""
    if gender_mode == GenderMode.ANY:
        return True
    if gender_mode == GenderMode.MEN:
        return gender == Gender.MALE
    if gender_mode == GenderMode.WOMEN:
        return gender == Gender.FEMALE
    if gender_mode == GenderMode.MIX_PAIRS:
        return gender in (Gender.MALE, Gender.FEMALE)
    return gender != Gender.PREFER_NOT_TO_SAY


def filter_eligible(
    participants: Iterable[Participant], gender_mode: GenderMode
) -> List[Participant]:
    """Keep PLAYING participants allowed by the gender mode, in roster order."""
    return [
        p
        for p in participants
        if p.is_playing and gender_allowed(p.gender, gender_mode)
    ]


def team_allowed(team: FixedTeam, gender_mode: GenderMode) -> bool:
    genders = [player.gender for player in team.players]
    if gender_mode == GenderMode.MIX_PAIRS:
        return Gender.MALE in genders and Gender.FEMALE in genders and all(
            gender_allowed(g, gender_mode) for g in genders
        )
    return all(gender_allowed(g, gender_mode) for g in genders)


def filter_fixed_teams(
    fixed_teams: Iterable[FixedTeam],
    gender_mode: GenderMode,
    eligible_ids: Iterable[str],
) -> List[FixedTeam]:
    """Keep fixed teams whose players all pass the gender mode and are eligible."""
    eligible = set(eligible_ids)
    return [
        team
        for team in fixed_teams
        if team_allowed(team, gender_mode) and team.is_usable(eligible)
    ]


def count_matches(
    players: Sequence[Participant], gender_mode: GenderMode, available_courts: int
) -> int:
    """Number of matches the round can hold.

    ``min(courts, players // 4)``; MIX_PAIRS counts per gender, since every
    court needs two men and two women.
    """
    if gender_mode == GenderMode.MIX_PAIRS:
        males = sum(1 for p in players if p.gender == Gender.MALE)
        females = sum(1 for p in players if p.gender == Gender.FEMALE)
        return max(0, min(available_courts, min(males, females) // PLAYERS_PER_TEAM))
    return max(0, min(available_courts, len(players) // PLAYERS_PER_MATCH))


@dataclass
class Eligibility:
    """The eligible subset of a roster and the match count it supports.

    Attributes
    ----------
    players : list of Participant
        Eligible players in roster order.
    teams : list of FixedTeam
        Usable fixed teams, empty unless the game uses fixed teams.
    num_matches : int
        Target number of matches, 0 meaning the round should be skipped.
    gender_mode : GenderMode
        Gender policy the subset was computed under.
    """

    players: List[Participant] = field(default_factory=list)
    teams: List[FixedTeam] = field(default_factory=list)
    num_matches: int = 0
    gender_mode: GenderMode = GenderMode.ANY

    @property
    def player_ids(self) -> List[str]:
        return [p.user_id for p in self.players]

    @property
    def males(self) -> List[Participant]:
        return [p for p in self.players if p.gender == Gender.MALE]

    @property
    def females(self) -> List[Participant]:
        return [p for p in self.players if p.gender == Gender.FEMALE]

    @property
    def needed_players(self) -> int:
        return self.num_matches * PLAYERS_PER_MATCH

    @property
    def needed_teams(self) -> int:
        return self.num_matches * TEAMS_PER_MATCH


def resolve_eligibility(
    participants: Iterable[Participant], config: GameConfig
) -> Eligibility:
    """Compute the eligible players, usable fixed teams and match count.

    Returns 0 matches, never an error, when too few players are eligible.
    """
    players = filter_eligible(participants, config.gender_teams)
    num_matches = count_matches(players, config.gender_teams, config.available_courts)
    teams: List[FixedTeam] = []
    if config.uses_fixed_teams:
        teams = filter_fixed_teams(
            config.fixed_teams, config.gender_teams, (p.user_id for p in players)
        )
        num_matches = min(num_matches, len(teams) // TEAMS_PER_MATCH)
    return Eligibility(
        players=players,
        teams=teams,
        num_matches=num_matches,
        gender_mode=config.gender_teams,
    )
