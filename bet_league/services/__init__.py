from .evaluation_service import EvaluationService, EvaluationSummary, UserEvaluation, evaluation_service

__all__ = ["EvaluationService", "EvaluationSummary", "UserEvaluation", "evaluation_service"]
