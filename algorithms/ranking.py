# algorithms/ranking.py

DEFAULT_RESULT_LIMIT = 20


def rank(scored, limit=DEFAULT_RESULT_LIMIT):
    """
    Order scored candidates best first and keep the top `limit`.
    Highest match_score wins, then the nearest donor, then the lowest id.
    """
    ranked = sorted(scored, key=lambda c: (-c.match_score, c.distance_meters, c.id))
    return ranked[:limit]
