from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from marketplace.models.brand import Brand
from marketplace.models.category import Category
from marketplace.models.product import Product


@dataclass(frozen=True)
class MasterCounts:
    categories: int
    subcategories: int
    brands: int
    products: int


MASTER_COUNT_QUERIES: dict[str, Select] = {
    "categories": select(func.count()).select_from(Category).where(Category.parent_id.is_(None)),
    "subcategories": select(func.count())
    .select_from(Category)
    .where(Category.parent_id.is_not(None)),
    "brands": select(func.count()).select_from(Brand),
    "products": select(func.count()).select_from(Product),
}


def _count(session_factory: Callable[[], Session], stmt: Select) -> int:
    with session_factory() as db:
        return int(db.scalar(stmt) or 0)


def get_master_counts(session_factory: Callable[[], Session]) -> MasterCounts:
    # Each count runs on its own session; there is no shared snapshot across them.
    with ThreadPoolExecutor(max_workers=len(MASTER_COUNT_QUERIES)) as pool:
        futures = {
            name: pool.submit(_count, session_factory, stmt)
            for name, stmt in MASTER_COUNT_QUERIES.items()
        }
        return MasterCounts(**{name: future.result() for name, future in futures.items()})
