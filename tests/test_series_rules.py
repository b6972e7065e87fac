from bet_league.scoring import SeriesContext, SeriesScore
from bet_league.scoring.rules import evaluate_series_exact, evaluate_series_winner


def _context(predicted, actual):
    return SeriesContext(prediction=SeriesScore(*predicted), actual=SeriesScore(*actual))


def test_series_exact():
    assert evaluate_series_exact(_context((4, 2), (4, 2))) is True
    assert evaluate_series_exact(_context((4, 2), (4, 3))) is False


def test_series_winner():
    assert evaluate_series_winner(_context((4, 0), (4, 3))) is True
    assert evaluate_series_winner(_context((4, 0), (2, 4))) is False


def test_series_winner_also_true_for_exact_result():
    # Exclusion against series_exact is applied by the coordinator
    assert evaluate_series_winner(_context((4, 1), (4, 1))) is True


def test_incomplete_scores_never_award():
    assert evaluate_series_exact(_context((4, None), (4, 1))) is False
    assert evaluate_series_winner(_context((4, 1), (None, None))) is False
