"""
Ranking layer: score and order contenders
"""

from .ranker import rank_score, rank_contenders
from ..data.expiries import time_difference

__all__ = ["rank_score", "rank_contenders", "time_difference"]
