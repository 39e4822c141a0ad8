import logging
from typing import Optional

import requests
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .rss import FeedError, extract, fetch_feed, first_item

logger = logging.getLogger(__name__)

FEED_URL = "https://www.goodreads.com/review/list_rss/{user_id}?shelf={shelf}"
STAR = "★"


class BookStatus(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    book: Optional[str] = None
    author: Optional[str] = None
    url: Optional[str] = None
    rating: Optional[str] = None
    read_at: Optional[str] = None
    status: Optional[str] = None


def parse_book(item: str) -> BookStatus:
    """Read title, author, link, star rating and read date from a shelf item"""
    rating = extract(item, "user_rating")
    stars = int(rating) if rating and rating.isdigit() else 0

    return BookStatus(
        book=extract(item, "title"),
        author=extract(item, "author_name"),
        url=extract(item, "link"),
        rating=STAR * stars if stars > 0 else None,
        read_at=extract(item, "user_read_at"),
    )


def get_reading_status(user_id: str, session: Optional[requests.Session] = None) -> BookStatus:
    """Return the book being read, else the last one finished, else an empty status"""
    for shelf, status in (("currently-reading", "reading"), ("read", "finished")):
        try:
            document = fetch_feed(FEED_URL.format(user_id=user_id, shelf=shelf), session)
        except FeedError:
            return BookStatus()

        item = first_item(document)
        if item:
            book = parse_book(item)
            book.status = status
            return book

    logger.info(f"No books found on Goodreads shelves for {user_id}")
    return BookStatus()
