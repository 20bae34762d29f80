from functools import lru_cache
import logging
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from data_models.browse import (
    BrowseResponse,
    CategoryListItem,
    FooterSitemapResponse,
    SitemapResponse,
)
from settings import BrowseSettings
from storage.manager import StorageManager
from utils.config import get_settings
from utils.profiling import ProfilingMiddleware
from utils.sitemap_data import (
    build_browse_data,
    build_footer_sitemap,
    build_sitemap_data,
    list_categories,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="content-browse")
app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]  # ty bug: FastAPI accepts middleware classes directly
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

if get_settings().profiling_enabled:
    app.add_middleware(
        ProfilingMiddleware,  # type: ignore[arg-type]
        output_dir=get_settings().profile_output_dir,
    )


@lru_cache(maxsize=1)
def get_storage_manager() -> StorageManager:
    return StorageManager(database_path=get_settings().storage_path)


def _set_cache_headers(response: Response, max_age: int) -> None:
    response.headers["Cache-Control"] = (
        f"public, s-maxage={max_age}, stale-while-revalidate={max_age * 2}"
    )


@app.get("/api/sitemap-data")
def get_sitemap_data(
    response: Response,
    storage_manager: StorageManager = Depends(get_storage_manager),
    settings: BrowseSettings = Depends(get_settings),
) -> SitemapResponse:
    """Category forest (empty branches pruned) with uncategorized counts and stats"""
    try:
        data = build_sitemap_data(storage_manager, order=settings.category_order)
    except SQLAlchemyError as e:
        logger.exception("Error fetching sitemap data")
        raise HTTPException(status_code=500, detail="Failed to fetch sitemap data") from e

    _set_cache_headers(response, settings.cache_max_age)
    return data


@app.get("/api/browse")
def get_browse_data(
    response: Response,
    storage_manager: StorageManager = Depends(get_storage_manager),
    settings: BrowseSettings = Depends(get_settings),
) -> BrowseResponse:
    """Every category with its content counts, for the browse page"""
    try:
        data = build_browse_data(storage_manager, order=settings.category_order)
    except SQLAlchemyError as e:
        logger.exception("Error fetching browse data")
        raise HTTPException(status_code=500, detail="Failed to fetch browse data") from e

    _set_cache_headers(response, settings.cache_max_age)
    return data


@app.get("/api/footer-sitemap")
def get_footer_sitemap(
    response: Response,
    storage_manager: StorageManager = Depends(get_storage_manager),
    settings: BrowseSettings = Depends(get_settings),
) -> FooterSitemapResponse:
    """Categories with their newest published articles"""
    try:
        data = build_footer_sitemap(
            storage_manager, per_category=settings.footer_articles_per_category
        )
    except SQLAlchemyError as e:
        logger.exception("Error fetching footer sitemap data")
        raise HTTPException(
            status_code=500, detail="Failed to fetch footer sitemap data"
        ) from e

    _set_cache_headers(response, settings.cache_max_age // 2)
    return data


@app.get("/api/categories")
def get_categories(
    storage_manager: StorageManager = Depends(get_storage_manager),
) -> List[CategoryListItem]:
    """Flat category listing ordered by name"""
    try:
        return list_categories(storage_manager)
    except SQLAlchemyError as e:
        logger.exception("Error fetching categories")
        raise HTTPException(status_code=500, detail="Failed to fetch categories") from e
