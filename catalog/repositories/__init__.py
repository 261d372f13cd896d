from catalog.repositories.category import CategoryRepository
from catalog.repositories.product import ProductRepository
from catalog.repositories.protocols import CategoryRepositoryProtocol, ProductRepositoryProtocol

__all__ = [
    "CategoryRepository",
    "CategoryRepositoryProtocol",
    "ProductRepository",
    "ProductRepositoryProtocol",
]
