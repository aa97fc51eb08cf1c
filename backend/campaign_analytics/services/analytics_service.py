"""Aggregate statistics and rankings over a campaign's posts.

Everything here is recomputed from the post list on each call; nothing is
cached between requests.
"""
import math
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Callable, Dict, List, Sequence, Union
from ..models.post import Post

TOP_N = 5

PostId = Union[int, str]


@dataclass(frozen=True)
class AnalyticsView:
    total_followers_gained: int
    overall_engagement_rate: str
    top5_engagement: List[PostId]
    top5_shares: List[PostId]
    best_media_type: str
    best_media_type_rate: str
    media_types: List[str]


def format_fixed(value: float, places: int = 4) -> str:
    """Format like JavaScript's toFixed: half away from zero at the last place."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    number = Decimal(repr(value))
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # room for every integer digit plus the requested places
        ctx.prec = max(28, number.adjusted() + places + 2)
        return str(number.quantize(quantum, rounding=ROUND_HALF_UP))


def mean(values: Sequence[float]) -> float:
    try:
        return math.fsum(values) / len(values)
    except OverflowError:
        # the sum left float range; averaging the scaled terms stays inside it
        return math.fsum(v / len(values) for v in values)


def total_followers_gained(posts: Sequence[Post]) -> int:
    return sum(post.followers_gained for post in posts)


def average_engagement_rate(posts: Sequence[Post]) -> str:
    """Mean engagement rate to 4 decimal places, e.g. ``"3.5000"``."""
    if not posts:
        raise ValueError("average_engagement_rate requires at least one post")
    return format_fixed(mean([post.engagement_rate for post in posts]))


def top_post_ids(posts: Sequence[Post], key: Callable[[Post], float], n: int = TOP_N) -> List[PostId]:
    """Ids of the ``n`` highest posts by ``key``; ties keep row order."""
    # sorted() stays stable with reverse=True
    ranked = sorted(posts, key=key, reverse=True)
    return [post.id for post in ranked[:n]]


def media_type_averages(posts: Sequence[Post]) -> Dict[str, float]:
    """Average engagement rate per media type, in first-seen order."""
    rates: Dict[str, List[float]] = {}
    for post in posts:
        rates.setdefault(post.media_type, []).append(post.engagement_rate)
    return {media_type: mean(values) for media_type, values in rates.items()}


def distinct_media_types(posts: Sequence[Post]) -> List[str]:
    return list(dict.fromkeys(post.media_type for post in posts))


def compute_analytics(posts: Sequence[Post]) -> AnalyticsView:
    if not posts:
        raise ValueError("compute_analytics requires at least one post")

    best_media_type = ""
    best_rate = None
    for media_type, rate in media_type_averages(posts).items():
        # strict comparison: the first media type wins a tie
        if best_rate is None or rate > best_rate:
            best_media_type, best_rate = media_type, rate

    return AnalyticsView(
        total_followers_gained=total_followers_gained(posts),
        overall_engagement_rate=average_engagement_rate(posts),
        top5_engagement=top_post_ids(posts, key=lambda p: p.engagement_rate),
        top5_shares=top_post_ids(posts, key=lambda p: p.shares),
        best_media_type=best_media_type,
        best_media_type_rate=format_fixed(best_rate),
        media_types=distinct_media_types(posts),
    )


def filter_posts_by_media_type(posts: Sequence[Post], media_type: str = "all") -> List[Post]:
    """Posts with exactly the given media type; ``"all"`` keeps every post."""
    if media_type == "all":
        return list(posts)
    return [post for post in posts if post.media_type == media_type]
