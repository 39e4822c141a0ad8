import logging
import math
from typing import Optional

import requests
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .rss import FeedError, extract, fetch_feed, first_item

logger = logging.getLogger(__name__)

FEED_URL = "https://letterboxd.com/{username}/rss/"
STAR = "★"
HALF_STAR = "½"


class FilmStatus(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    film: Optional[str] = None
    year: Optional[str] = None
    rating: Optional[str] = None
    url: Optional[str] = None
    watched_date: Optional[str] = None
    is_rewatch: bool = False


def rating_to_stars(rating: Optional[float]) -> Optional[str]:
    """Render a 0.5-5 member rating as full stars plus an optional half"""
    if rating is None:
        return None
    full_stars = math.floor(rating)
    stars = STAR * full_stars
    if rating % 1 >= 0.5:
        stars += HALF_STAR
    return stars


def parse_film(item: str) -> FilmStatus:
    raw_rating = extract(item, "letterboxd:memberRating")
    try:
        rating = float(raw_rating) if raw_rating else None
    except ValueError:
        rating = None

    return FilmStatus(
        film=extract(item, "letterboxd:filmTitle"),
        year=extract(item, "letterboxd:filmYear"),
        rating=rating_to_stars(rating),
        url=extract(item, "link"),
        watched_date=extract(item, "letterboxd:watchedDate"),
        is_rewatch=extract(item, "letterboxd:rewatch") == "Yes",
    )


def get_latest_film(username: str, session: Optional[requests.Session] = None) -> FilmStatus:
    """Return the most recent diary entry, or an empty status when there is none"""
    try:
        document = fetch_feed(FEED_URL.format(username=username), session)
    except FeedError:
        return FilmStatus()

    item = first_item(document)
    if not item:
        logger.info(f"Letterboxd feed for {username} has no items")
        return FilmStatus()
    return parse_film(item)
