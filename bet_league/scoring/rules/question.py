"""Yes/no question rule"""

QUESTION_CORRECT = 1.0
QUESTION_WRONG = -0.5


def evaluate_question(context):
    """Full points for a correct answer, minus half for a wrong one, 0 without a pick"""
    if context.prediction is None:
        return 0

    if context.prediction == context.actual:
        return QUESTION_CORRECT

    return QUESTION_WRONG
