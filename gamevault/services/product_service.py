# gamevault/services/product_service.py
import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from ..constants import CATEGORY_ALL
from ..database import Store
from ..errors import PermissionDenied, UserNotFound
from ..models.product import Product, ProductCategory


def query_products(products: Iterable[Product],
                   category: Optional[Union[str, ProductCategory]] = None,
                   search_text: str = "",
                   match_description: bool = True) -> List[Product]:
    """Filter an already fetched product list, keeping its order.

    ``category`` of None or ``CATEGORY_ALL`` disables the category filter.
    The search is a case-insensitive substring match on the title and,
    unless ``match_description`` is off, the description.
    """
    needle = (search_text or "").strip().lower()
    matches = []
    for product in products:
        if category not in (None, CATEGORY_ALL) and product.category != category:
            continue
        if needle:
            fields = [product.title]
            if match_description:
                fields.append(product.description)
            if not any(needle in field.lower() for field in fields):
                continue
        matches.append(product)
    return matches


class ProductService:
    def __init__(self, store: Store):
        self.store = store
        self.logger = logging.getLogger(__name__)

    async def list_products(self, category: Optional[str] = None,
                            search_text: str = "") -> List[Product]:
        """Catalog listing, newest first"""
        products = await self.store.products.list()
        return query_products(products, category, search_text)

    async def get_product(self, product_id: str) -> Product:
        return await self.store.products.get(product_id)

    async def add_product(self, admin_id: str, product_data: Mapping[str, Any]) -> Product:
        """Add a new product"""
        await self._require_admin(admin_id, "add products")
        product = await self.store.products.insert(product_data)
        self.logger.info(f"Product {product.id} added by {admin_id}")
        return product

    async def update_product(self, admin_id: str, product_id: str,
                             changes: Dict[str, Any]) -> Product:
        """Edit a product; its id never changes"""
        await self._require_admin(admin_id, "edit products")
        product = await self.store.products.update(product_id, changes)
        self.logger.info(f"Product {product_id} updated by {admin_id}: {sorted(changes)}")
        return product

    async def delete_product(self, admin_id: str, product_id: str) -> None:
        await self._require_admin(admin_id, "delete products")
        await self.store.products.delete(product_id)
        self.logger.info(f"Product {product_id} deleted by {admin_id}")

    async def set_image_url(self, admin_id: str, product_id: str, image_url: str) -> Product:
        """Attach an uploaded image; only the URL is stored"""
        return await self.update_product(admin_id, product_id, {"image_url": image_url})

    async def _require_admin(self, user_id: str, action: str):
        try:
            user = await self.store.users.get(str(user_id))
        except UserNotFound:
            raise PermissionDenied(str(user_id), action)
        if not user.is_admin:
            raise PermissionDenied(str(user_id), action)
