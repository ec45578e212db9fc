"""
Entity validators.

Pure functions that check a candidate against the invariants of its entity
type before anything is written. Every invariant is checked and all
violations are reported together, so a client can fix a request in one
round trip. On success the normalized candidate is returned: strings
stripped, emails lower-cased, roles and dates parsed.
"""

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Collection, List, Mapping, Optional

from league.constants import (
    EMAIL_PATTERN,
    MAX_EMAIL_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_RESULT_LENGTH,
    MAX_TEAM_NAME_LENGTH,
    PASSWORD_MAX_BYTES,
    PASSWORD_MIN_LENGTH,
    PHONE_PATTERN,
    TEAMS_PER_GAME,
)
from league.dataclasses import (
    GameCandidate,
    TeamCandidate,
    UserCandidate,
    Violation,
    is_id,
)
from league.enums import Role
from league.errors import ValidationFailed
from league.results import Failure, Ok, Result


def _finish(violations: List[Violation], normalized) -> Result:
    if violations:
        return Failure(ValidationFailed(violations))
    return Ok(normalized)


def _required_text(
    value: Any,
    field: str,
    max_length: int,
    violations: List[Violation]
) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        violations.append(Violation(field, 'is required'))
        return None
    value = value.strip()
    if len(value) > max_length:
        violations.append(Violation(field, f'must be {max_length} characters or less'))
    return value


# ==================== USERS ====================

def validate_user(candidate: UserCandidate, require_password: bool = True) -> Result[UserCandidate]:
    """Validate a user candidate.

    Args:
        candidate: The user fields to check.
        require_password: Whether a password must be present. Updates pass
            False and only check a password when one is supplied.
    """
    violations: List[Violation] = []

    first_name = _required_text(candidate.first_name, 'first_name', MAX_NAME_LENGTH, violations)
    last_name = _required_text(candidate.last_name, 'last_name', MAX_NAME_LENGTH, violations)

    email = candidate.email
    if not isinstance(email, str) or not email.strip():
        violations.append(Violation('email', 'is required'))
    else:
        email = email.strip().lower()
        if len(email) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(email):
            violations.append(Violation('email', 'must be a valid email address'))

    # Optional; blank means absent
    phone = candidate.phone_number
    if isinstance(phone, str):
        phone = phone.strip() or None
    if phone is not None and (not isinstance(phone, str) or len(phone) > MAX_PHONE_LENGTH
                              or not PHONE_PATTERN.match(phone)):
        violations.append(Violation('phone_number', 'must be a valid phone number'))

    role = Role.from_string(candidate.role)
    if role is None:
        allowed = ', '.join(r.value for r in Role)
        violations.append(Violation('role', f'must be one of: {allowed}'))

    password = candidate.password
    if require_password or password is not None:
        if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
            violations.append(
                Violation('password', f'must be at least {PASSWORD_MIN_LENGTH} characters')
            )
        elif len(password.encode('utf-8')) > PASSWORD_MAX_BYTES:
            violations.append(
                Violation('password', f'must be at most {PASSWORD_MAX_BYTES} bytes')
            )

    return _finish(violations, replace(
        candidate,
        first_name=first_name,
        last_name=last_name,
        email=email,
        phone_number=phone,
        role=role,
    ))


# ==================== TEAMS ====================

def validate_team(
    candidate: TeamCandidate,
    members: Mapping[int, Role],
    enforce_roles: bool = True
) -> Result[TeamCandidate]:
    """Validate a team candidate.

    Args:
        candidate: The team fields to check.
        members: Role of every referenced user that exists. Ids missing
            from the mapping are reported as unknown users.
        enforce_roles: When True the coach must hold the coach role and
            every player the player role.
    """
    violations: List[Violation] = []

    name = _required_text(candidate.name, 'name', MAX_TEAM_NAME_LENGTH, violations)

    coach_id = candidate.coach_id
    if not is_id(coach_id):
        violations.append(Violation('coach_id', 'is required'))
    elif coach_id not in members:
        violations.append(Violation('coach_id', f'user {coach_id} does not exist'))
    elif enforce_roles and members[coach_id] != Role.COACH:
        violations.append(Violation('coach_id', f'user {coach_id} is not a coach'))

    player_ids = candidate.player_ids
    if not isinstance(player_ids, (list, tuple)) or not all(is_id(p) for p in player_ids):
        violations.append(Violation('player_ids', 'must be a list of user ids'))
        player_ids = []
    else:
        seen = set()
        for player_id in player_ids:
            if player_id in seen:
                violations.append(Violation('player_ids', f'player {player_id} is listed more than once'))
                continue
            seen.add(player_id)
            if player_id == coach_id:
                violations.append(Violation('player_ids', 'the coach cannot also be a player'))
            elif player_id not in members:
                violations.append(Violation('player_ids', f'user {player_id} does not exist'))
            elif enforce_roles and members[player_id] != Role.PLAYER:
                violations.append(Violation('player_ids', f'user {player_id} is not a player'))

    return _finish(violations, replace(candidate, name=name, player_ids=list(player_ids)))


# ==================== GAMES ====================

def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 date-time into naive UTC, or None if unparseable."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def validate_game(
    candidate: GameCandidate,
    known_team_ids: Optional[Collection[int]] = None
) -> Result[GameCandidate]:
    """Validate a game candidate.

    A game needs a date and exactly two distinct teams. When
    ``known_team_ids`` is given, every referenced team must be in it.
    """
    violations: List[Violation] = []

    date = None
    if candidate.date is None or candidate.date == '':
        violations.append(Violation('date', 'is required'))
    else:
        date = parse_datetime(candidate.date)
        if date is None:
            violations.append(Violation('date', 'must be an ISO-8601 date-time'))

    result = candidate.result
    if result is not None:
        if not isinstance(result, str):
            violations.append(Violation('result', 'must be text'))
        else:
            result = result.strip() or None
            if result and len(result) > MAX_RESULT_LENGTH:
                violations.append(Violation('result', f'must be {MAX_RESULT_LENGTH} characters or less'))

    team_ids = candidate.team_ids
    if team_ids is None:
        violations.append(Violation('team_ids', 'are required'))
        team_ids = []
    elif not isinstance(team_ids, (list, tuple)) or not all(is_id(t) for t in team_ids):
        violations.append(Violation('team_ids', 'must be a list of team ids'))
        team_ids = []
    elif len(team_ids) != TEAMS_PER_GAME:
        violations.append(Violation(
            'team_ids', f'exactly {TEAMS_PER_GAME} teams are required, got {len(team_ids)}'
        ))
    elif len(set(team_ids)) != len(team_ids):
        violations.append(Violation('team_ids', 'a team cannot play against itself'))
    elif known_team_ids is not None:
        for team_id in team_ids:
            if team_id not in known_team_ids:
                violations.append(Violation('team_ids', f'team {team_id} does not exist'))

    return _finish(violations, replace(
        candidate, date=date, result=result, team_ids=list(team_ids)
    ))
