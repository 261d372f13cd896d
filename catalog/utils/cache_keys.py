"""
Deterministic cache key derivation.

Keys are colon-separated and always start with their namespace so a single
``"{namespace}:*"`` pattern reaches every entry of that namespace:

    products:id:<uuid>
    products:all
    products:filter:<digest>

Filtered-query keys hash a canonical rendering of every filter value, so two
queries share a key exactly when all their filter values and paging match.
"""

from base64 import urlsafe_b64encode
from hashlib import sha256
from typing import Protocol
from uuid import UUID

from catalog.errors.cache import CacheKeyError

PRODUCTS = "products"
CATEGORIES = "categories"

NULL = "null"

# (label in the canonical text, attribute on the filter object), in hash order
PRODUCT_FILTER_FIELDS: tuple[tuple[str, str], ...] = (
    ("search", "search_term"),
    ("minStock", "min_stock_quantity"),
    ("maxStock", "max_stock_quantity"),
    ("isLive", "is_live"),
    ("categoryId", "category_id"),
)


class ProductFilterCriteria(Protocol):
    search_term: str | None
    min_stock_quantity: int | None
    max_stock_quantity: int | None
    is_live: bool | None
    category_id: UUID | None


def _render(value: object) -> str:
    # None and the empty search term share one sentinel
    if value is None or value == "":
        return NULL
    return str(value)


def _namespace(namespace: str) -> str:
    if not namespace or not namespace.strip() or ":" in namespace:
        raise CacheKeyError(f"Invalid cache namespace: {namespace!r}")
    return namespace


def fingerprint(text: str) -> str:
    """SHA-256 of ``text`` as URL-safe base64 without padding (43 chars)."""
    digest = sha256(text.encode("utf-8")).digest()
    return urlsafe_b64encode(digest).rstrip(b"=").decode("ascii")


class CacheKeyGenerator:
    """Builds every cache key the handlers use. Pure, no I/O."""

    def key_for_entity(self, namespace: str, entity_id: UUID | str) -> str:
        return f"{_namespace(namespace)}:id:{entity_id}"

    def key_for_collection(self, namespace: str) -> str:
        return f"{_namespace(namespace)}:all"

    def key_for_filtered_query(
        self,
        namespace: str,
        filters: ProductFilterCriteria | None,
        page: int,
        page_size: int,
    ) -> str:
        """
        Hash the filter values and paging into a fixed-length key.

        Args:
            namespace: Key namespace, also the first segment of the key.
            filters: Object exposing the product filter attributes, or None
                for a plain paged listing.
            page: 1-based page number.
            page_size: Items per page.

        Returns:
            ``"{namespace}:filter:{digest}"``.

        Raises:
            CacheKeyError: If the namespace is blank or contains a colon.
        """
        parts = [f"{_namespace(namespace)}:filter"]
        if filters is not None:
            parts.extend(
                f"{label}={_render(getattr(filters, attr, None))}"
                for label, attr in PRODUCT_FILTER_FIELDS
            )
        parts.append(f"page={page}")
        parts.append(f"pageSize={page_size}")
        return f"{namespace}:filter:{fingerprint(':'.join(parts))}"

    def namespace_pattern(self, namespace: str) -> str:
        return f"{_namespace(namespace)}:*"

    # --- convenience ---

    def product_by_id_key(self, product_id: UUID) -> str:
        return self.key_for_entity(PRODUCTS, product_id)

    def all_products_key(self) -> str:
        return self.key_for_collection(PRODUCTS)

    def product_filter_key(
        self,
        filters: ProductFilterCriteria,
        page: int,
        page_size: int,
    ) -> str:
        return self.key_for_filtered_query(PRODUCTS, filters, page, page_size)

    def category_by_id_key(self, category_id: UUID) -> str:
        return self.key_for_entity(CATEGORIES, category_id)

    def all_categories_key(self) -> str:
        return self.key_for_collection(CATEGORIES)

    def category_page_key(self, page: int, page_size: int) -> str:
        return self.key_for_filtered_query(CATEGORIES, None, page, page_size)
