"""Type hints used in Court Pairing."""

from typing import Dict, List, Literal, Optional, Sequence, Tuple

# Team side string constants (for runtime use)
TEAM_A = "teamA"
TEAM_B = "teamB"

TeamSide = Literal["teamA", "teamB"]
# Outcome of a single match, None when nothing has been played yet
MatchOutcome = Optional[Literal["teamA", "teamB", "tie"]]

PlayerId = str
# Canonical key of an unordered player pair
PairKey = str
# Canonical key of a fixed team
TeamKey = str

# Players on one side of a match
Team = List[PlayerId]
Pair = Tuple[PlayerId, PlayerId]
# A team-vs-team layout before ids and score sheets are attached
Matchup = Tuple[Sequence[PlayerId], Sequence[PlayerId]]

PlayCounts = Dict[PlayerId, int]
PairCounts = Dict[PairKey, int]

#  LocalWords:  Matchup
