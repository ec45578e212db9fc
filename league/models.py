from datetime import datetime, timezone

from league import db
from league.enums import GameStatus


def get_utc_time():
    """Get current time in UTC"""
    return datetime.now(timezone.utc)


team_players = db.Table(
    'team_players',
    db.Column('team_id', db.Integer, db.ForeignKey('teams.id', ondelete='CASCADE'), primary_key=True),
    db.Column('user_id', db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), primary_key=True),
)

game_teams = db.Table(
    'game_teams',
    db.Column('game_id', db.Integer, db.ForeignKey('games.id', ondelete='CASCADE'), primary_key=True),
    db.Column('team_id', db.Integer, db.ForeignKey('teams.id'), primary_key=True),
)


class User(db.Model):
    """A league member: player, coach or administrator"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(254), nullable=False, unique=True, index=True)
    phone_number = db.Column(db.String(32))
    password_hash = db.Column(db.String(128), nullable=False)
    role = db.Column(db.String(20), nullable=False, default='player')
    created_at = db.Column(db.DateTime, default=get_utc_time)

    coached_teams = db.relationship('Team', back_populates='coach', lazy=True)

    @property
    def full_name(self) -> str:
        return f'{self.first_name} {self.last_name}'

    def __repr__(self):
        return f'<User {self.email}>'


class Team(db.Model):
    """Team with one coach and any number of players"""
    __tablename__ = 'teams'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    coach_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)

    coach = db.relationship('User', back_populates='coached_teams')
    players = db.relationship('User', secondary=team_players, backref='player_teams', lazy=True)
    games = db.relationship('Game', secondary=game_teams, back_populates='teams', lazy=True)

    def __repr__(self):
        return f'<Team {self.name}>'


class Game(db.Model):
    """A fixture between exactly two teams"""
    __tablename__ = 'games'

    id = db.Column(db.Integer, primary_key=True)
    date = db.Column(db.DateTime, nullable=False)
    result = db.Column(db.String(100), nullable=True)

    teams = db.relationship(
        'Team', secondary=game_teams, back_populates='games', lazy=True, order_by='Team.id'
    )

    @property
    def status(self) -> GameStatus:
        return GameStatus.COMPLETED if self.result else GameStatus.SCHEDULED

    def __repr__(self):
        return f'<Game {self.id} on {self.date}>'
