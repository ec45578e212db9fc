"""
Data classes for structured data in the league application.

Candidates are the plain, unvalidated shape of an entity as it arrives from
a request body. Validators turn them into normalized candidates, and only a
normalized candidate ever reaches the repositories.
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Tuple

from league.enums import Role


def is_id(value: Any) -> bool:
    """True for integer primary keys; booleans are not ids."""
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Violation:
    """A single failed invariant."""
    field: str
    reason: str

    def to_dict(self) -> Dict[str, str]:
        return {"field": self.field, "reason": self.reason}


class _Candidate:
    """Shared payload helpers for the candidate dataclasses."""

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_payload(cls, data: Dict[str, Any]):
        """Build a candidate from a request body, ignoring unknown keys."""
        return cls(**{name: data.get(name) for name in cls.field_names()})

    def merged(self, data: Dict[str, Any]):
        """Overlay the keys present in a partial update body."""
        changes = {name: data[name] for name in self.field_names() if name in data}
        return replace(self, **changes)


@dataclass(frozen=True)
class UserCandidate(_Candidate):
    first_name: Any = None
    last_name: Any = None
    email: Any = None
    phone_number: Any = None
    role: Any = None
    password: Any = None

    @classmethod
    def from_model(cls, user) -> "UserCandidate":
        return cls(
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            phone_number=user.phone_number,
            role=user.role,
        )


@dataclass(frozen=True)
class TeamCandidate(_Candidate):
    name: Any = None
    coach_id: Any = None
    player_ids: Any = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "TeamCandidate":
        candidate = super().from_payload(data)
        if candidate.player_ids is None:
            candidate = replace(candidate, player_ids=[])
        return candidate

    @classmethod
    def from_model(cls, team) -> "TeamCandidate":
        return cls(
            name=team.name,
            coach_id=team.coach_id,
            player_ids=[p.id for p in team.players],
        )

    def referenced_user_ids(self) -> List[int]:
        """Every integer user id the candidate points at."""
        ids = [self.coach_id] if is_id(self.coach_id) else []
        if isinstance(self.player_ids, (list, tuple)):
            ids.extend(p for p in self.player_ids if is_id(p))
        return ids


@dataclass(frozen=True)
class GameCandidate(_Candidate):
    date: Any = None
    result: Any = None
    team_ids: Any = None

    @classmethod
    def from_model(cls, game) -> "GameCandidate":
        return cls(
            date=game.date,
            result=game.result,
            team_ids=[t.id for t in game.teams],
        )

    def referenced_team_ids(self) -> List[int]:
        if not isinstance(self.team_ids, (list, tuple)):
            return []
        return [t for t in self.team_ids if is_id(t)]


@dataclass(frozen=True)
class IssuedToken:
    """A freshly signed identity token and its expiry instant."""
    token: str
    expires_at: Any

    def to_dict(self) -> Dict[str, Any]:
        return {"token": self.token, "token_expiry": self.expires_at.isoformat()}


@dataclass(frozen=True)
class Identity:
    """The authenticated caller of a request."""
    subject_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

