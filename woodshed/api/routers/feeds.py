from fastapi import APIRouter, Depends, Response

from woodshed.api.dependencies import get_config
from woodshed.config import AppConfig
from woodshed.feeds.goodreads import BookStatus, get_reading_status
from woodshed.feeds.letterboxd import FilmStatus, get_latest_film


router = APIRouter(tags=["feeds"])


@router.get("/goodreads", response_model=BookStatus)
def get_goodreads(response: Response, config: AppConfig = Depends(get_config)) -> BookStatus:
    """Return the book currently being read, or the last one finished."""
    response.headers["Cache-Control"] = "s-maxage=600, stale-while-revalidate"
    return get_reading_status(config["GOODREADS_USER_ID"])


@router.get("/letterboxd", response_model=FilmStatus)
def get_letterboxd(response: Response, config: AppConfig = Depends(get_config)) -> FilmStatus:
    """Return the most recently logged film."""
    response.headers["Cache-Control"] = "s-maxage=300, stale-while-revalidate"
    return get_latest_film(config["LETTERBOXD_USERNAME"])
