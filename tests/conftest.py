from datetime import datetime

import pytest

from bet_league import create_app, db
from bet_league.models import (
    League,
    LeagueEvaluator,
    LeagueMatch,
    LeaguePlayer,
    LeagueTeam,
    Match,
    User,
)

KICKOFF = datetime(2024, 5, 10, 20, 0)

MATCH_RULES = [
    ("exact_score", 5),
    ("score_difference", 3),
    ("one_team_score", 1),
    ("draw", 2),
    ("winner", 1),
]


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def users(app):
    users = [User(username=name, email=f"{name}@example.com") for name in ("alice", "bob", "carol")]
    db.session.add_all(users)
    db.session.commit()
    return users


@pytest.fixture
def league(app):
    league = League(name="Ice Hockey World Championship", season_from=2024, season_to=2024)
    db.session.add(league)
    db.session.commit()
    return league


@pytest.fixture
def teams(league):
    teams = [
        LeagueTeam(league_id=league.id, name=name, abbreviation=abbreviation, group="A")
        for name, abbreviation in (
            ("Czechia", "CZE"),
            ("Canada", "CAN"),
            ("Sweden", "SWE"),
            ("Finland", "FIN"),
        )
    ]
    db.session.add_all(teams)
    db.session.commit()
    return teams


@pytest.fixture
def players(teams):
    players = [
        LeaguePlayer(league_team_id=teams[0].id, name="Pastrnak", position="F"),
        LeaguePlayer(league_team_id=teams[0].id, name="Necas", position="F"),
        LeaguePlayer(league_team_id=teams[1].id, name="McDavid", position="F"),
    ]
    db.session.add_all(players)
    db.session.commit()
    return players


@pytest.fixture
def match_rules(league):
    evaluators = [
        LeagueEvaluator.create(league.id, rule_name, points) for rule_name, points in MATCH_RULES
    ]
    db.session.commit()
    return evaluators


@pytest.fixture
def league_match(league, teams):
    match = Match(home_team_id=teams[0].id, away_team_id=teams[1].id, date_time=KICKOFF)
    db.session.add(match)
    db.session.flush()

    league_match = LeagueMatch(league_id=league.id, match_id=match.id)
    db.session.add(league_match)
    db.session.commit()
    return league_match
