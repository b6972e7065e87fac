#!/usr/bin/env python3
"""
Bet League Management CLI

This script provides command-line management functionality for evaluating
league bets and configuring league scoring rules.
"""

import json
import logging

import click
from flask.cli import with_appcontext
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from bet_league import create_app, db
from bet_league.models import League, LeagueEvaluator, LeagueMatch, User
from bet_league.scoring import ScoringError, get_kind, supported_rule_names
from bet_league.services.evaluation_service import evaluation_service

app = create_app()


@click.group()
def cli():
    """Bet League Management CLI"""
    pass


def _echo_summary(summary):
    click.echo(
        f"✅ Evaluated {summary.resource_type} {summary.resource_id}: "
        f"{summary.total_users_evaluated} bets, {summary.total_points} points"
    )
    for result in summary.results:
        breakdown = ", ".join(f"{name}={points}" for name, points in result.rule_points.items())
        click.echo(f"   user {result.user_id}: {result.total_points} ({breakdown})")


def _run_evaluation(label, evaluate, resource_id, user_id, admin_id):
    try:
        summary = evaluate(resource_id, user_id=user_id, admin_user_id=admin_id)
        _echo_summary(summary)
    except ScoringError as e:
        db.session.rollback()
        click.echo(f"❌ Cannot evaluate {label} {resource_id}: {e.message}")
        logging.error(f"{label.capitalize()} evaluation refused: {e}")
    except SQLAlchemyError as e:
        db.session.rollback()
        click.echo(f"❌ Database error evaluating {label}: {str(e)}")
        logging.error(f"{label.capitalize()} evaluation failed - SQL error: {e}")


# Evaluation Commands
@cli.group()
def evaluate():
    """Bet evaluation commands"""
    pass


@evaluate.command()
@click.argument("league_match_id", type=int)
@click.option("--user-id", type=int, help="Evaluate only this user's bet")
@click.option("--admin-id", type=int, help="Admin user recorded in the audit log")
@with_appcontext
def match(league_match_id, user_id, admin_id):
    """Evaluate all bets of a league match"""
    _run_evaluation("match", evaluation_service.evaluate_match, league_match_id, user_id, admin_id)


@evaluate.command()
@click.argument("series_id", type=int)
@click.option("--user-id", type=int, help="Evaluate only this user's bet")
@click.option("--admin-id", type=int, help="Admin user recorded in the audit log")
@with_appcontext
def series(series_id, user_id, admin_id):
    """Evaluate all bets of a series"""
    _run_evaluation("series", evaluation_service.evaluate_series, series_id, user_id, admin_id)


@evaluate.command("special-bet")
@click.argument("special_bet_id", type=int)
@click.option("--user-id", type=int, help="Evaluate only this user's bet")
@click.option("--admin-id", type=int, help="Admin user recorded in the audit log")
@with_appcontext
def special_bet(special_bet_id, user_id, admin_id):
    """Evaluate all bets of a special bet"""
    _run_evaluation(
        "special bet", evaluation_service.evaluate_special_bet, special_bet_id, user_id, admin_id
    )


@evaluate.command()
@click.argument("question_id", type=int)
@click.option("--user-id", type=int, help="Evaluate only this user's answer")
@click.option("--admin-id", type=int, help="Admin user recorded in the audit log")
@with_appcontext
def question(question_id, user_id, admin_id):
    """Evaluate all answers of a question"""
    _run_evaluation("question", evaluation_service.evaluate_question, question_id, user_id, admin_id)


@evaluate.command("league")
@click.argument("league_id", type=int)
@click.option("--admin-id", type=int, help="Admin user recorded in the audit log")
@with_appcontext
def evaluate_league(league_id, admin_id):
    """Re-evaluate every finished event of a league"""
    click.echo(f"🔄 Re-evaluating league {league_id}")
    click.echo("=" * 40)

    try:
        outcome = evaluation_service.reevaluate_league(league_id, admin_user_id=admin_id)
    except ScoringError as e:
        db.session.rollback()
        click.echo(f"❌ {e.message}")
        logging.error(f"League re-evaluation refused: {e}")
        return
    except SQLAlchemyError as e:
        db.session.rollback()
        click.echo(f"❌ Database error re-evaluating league: {str(e)}")
        logging.error(f"League re-evaluation failed - SQL error: {e}")
        return

    for summary in outcome["evaluated"]:
        click.echo(
            f"   ✅ {summary.resource_type} {summary.resource_id}: "
            f"{summary.total_users_evaluated} bets, {summary.total_points} points"
        )
    for resource_type, resource_id, message in outcome["failed"]:
        click.echo(f"   ❌ {resource_type} {resource_id}: {message}")

    click.echo(
        f"\n🎉 {len(outcome['evaluated'])} events evaluated, {len(outcome['failed'])} failed"
    )


# Rule Commands
@cli.group()
def rules():
    """Scoring rule commands"""
    pass


@rules.command("list")
@click.option(
    "--category",
    type=click.Choice(["match", "series", "special", "question"]),
    help="Only rules of this bet category",
)
def list_rules(category):
    """List all supported scoring rules"""
    click.echo("Supported rules:")
    for rule_name in supported_rule_names(category):
        click.echo(f"  {rule_name} ({get_kind(rule_name).value})")


# League Commands
@cli.group()
def league():
    """League scoring configuration commands"""
    pass


@league.command()
@click.argument("league_id", type=int)
@with_appcontext
def evaluators(league_id):
    """List the evaluators configured for a league"""
    league_obj = db.session.get(League, league_id)
    if not league_obj:
        click.echo(f"❌ League {league_id} not found!")
        return

    configured = league_obj.get_evaluators()
    if not configured:
        click.echo(f"No evaluators configured for {league_obj.name}.")
        return

    click.echo(f"Evaluators of {league_obj.name}:")
    for evaluator in configured:
        config = f" config={json.dumps(evaluator.config)}" if evaluator.config else ""
        click.echo(
            f"  [{evaluator.entity}] {evaluator.rule_name}: {evaluator.points} pts{config}"
        )


@league.command("add-evaluator")
@click.argument("league_id", type=int)
@click.argument("rule_name")
@click.argument("points", type=int)
@click.option("--config", "config_json", help="Rule config as JSON")
@click.option("--name", help="Display name")
@with_appcontext
def add_evaluator(league_id, rule_name, points, config_json, name):
    """Enable a scoring rule for a league"""
    try:
        league_obj = db.session.get(League, league_id)
        if not league_obj:
            click.echo(f"❌ League {league_id} not found!")
            return

        config = json.loads(config_json) if config_json else None
        evaluator = LeagueEvaluator.create(league_id, rule_name, points, config=config, name=name)
        db.session.commit()
        click.echo(f"✅ Added {evaluator.rule_name} ({evaluator.points} pts) to {league_obj.name}")

    except json.JSONDecodeError as e:
        click.echo(f"❌ Invalid config JSON: {str(e)}")
    except ScoringError as e:
        db.session.rollback()
        click.echo(f"❌ {e.message}")
        logging.error(f"Evaluator creation refused: {e}")
    except SQLAlchemyError as e:
        db.session.rollback()
        click.echo(f"❌ Database error adding evaluator: {str(e)}")
        logging.error(f"Evaluator creation failed - SQL error: {e}")


@league.command()
@click.argument("league_id", type=int)
@with_appcontext
def leaderboard(league_id):
    """Show the league leaderboard"""
    league_obj = db.session.get(League, league_id)
    if not league_obj:
        click.echo(f"❌ League {league_id} not found!")
        return

    entries = League.get_leaderboard(league_id)
    if not entries:
        click.echo("No evaluated bets yet.")
        return

    click.echo(f"🏆 {league_obj.name}")
    click.echo("=" * 40)
    for entry in entries:
        user = db.session.get(User, entry["user_id"])
        username = user.username if user else f"user {entry['user_id']}"
        click.echo(
            f"  {entry['position']:>3}. {username:<20} {entry['total_points']:>5} "
            f"(matches {entry['match_points']}, series {entry['series_points']}, "
            f"special {entry['special_points']}, questions {entry['question_points']})"
        )


# Database Commands
@cli.group()
def db_cmd():
    """Database commands"""
    pass


@db_cmd.command()
@with_appcontext
def init_db():
    """Initialize database tables"""
    try:
        db.create_all()
        click.echo("✅ Database tables created successfully!")
    except SQLAlchemyError as e:
        click.echo(f"❌ Error initializing database: {str(e)}")
        logging.error(f"Database initialization failed: {e}")


@db_cmd.command()
@with_appcontext
def reset():
    """⚠️  DANGER: Drop and recreate all tables"""
    if not click.confirm("This will DELETE ALL DATA. Are you sure?"):
        click.echo("Cancelled.")
        return

    try:
        db.drop_all()
        db.create_all()
        click.echo("✅ Database reset successfully!")
    except SQLAlchemyError as e:
        click.echo(f"❌ Error resetting database: {str(e)}")
        logging.error(f"Database reset failed: {e}")


# Info Commands
@cli.command()
@with_appcontext
def status():
    """Show application status"""
    click.echo("🎯 Bet League Status")
    click.echo("=" * 40)

    # Database connection
    try:
        db.session.execute(text("SELECT 1"))
        click.echo("✅ Database: Connected")
    except SQLAlchemyError as e:
        click.echo(f"❌ Database: Error - {str(e)}")
        return

    league_count = League.query.filter(League.deleted_at.is_(None)).count()
    click.echo(f"🏆 Leagues: {league_count}")

    user_count = User.query.filter_by(is_active=True).count()
    click.echo(f"👥 Active Users: {user_count}")

    total_matches = LeagueMatch.query.filter(LeagueMatch.deleted_at.is_(None)).count()
    click.echo(f"⚽ League matches: {total_matches}")

    stats = evaluation_service.get_stats()
    click.echo(f"📊 Evaluation runs this session: {stats['total_runs']}")


if __name__ == "__main__":
    with app.app_context():
        cli()
