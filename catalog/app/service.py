import logging
from typing import List, Optional

from .models import Product
from .repository import ProductRepository
from .schemas import ProductIn

logger = logging.getLogger(__name__)

class ProductService:
    """
    CRUD orchestration on top of ProductRepository.

    Absence is a normal outcome: lookups return None, delete returns False.
    Storage errors are not caught here; they reach get_session, which rolls back.
    update() and delete() read then write with no lock, so two concurrent
    requests on the same id can both pass the existence check.
    """

    def __init__(self, repository: ProductRepository):
        self.repository = repository

    def list_all(self) -> List[Product]:
        """Every stored product. Order is unspecified (storage default, not sorted)."""
        return self.repository.find_all()

    def get_by_id(self, pid: int) -> Optional[Product]:
        return self.repository.find_by_id(pid)

    def create(self, candidate: ProductIn) -> Product:
        # candidate.id is dropped; storage assigns the id.
        product = Product(
            name=candidate.name,
            description=candidate.description,
            price=candidate.price,
        )
        saved = self.repository.save(product)
        logger.info("created product id=%s", saved.id)
        return saved

    def update(self, pid: int, details: ProductIn) -> Optional[Product]:
        """
        Overwrite name, description and price of an existing product.
        Returns None without writing anything when pid is unknown (no upsert).
        """
        existing = self.repository.find_by_id(pid)
        if existing is None:
            logger.debug("update skipped, product id=%s not found", pid)
            return None
        existing.name = details.name
        existing.description = details.description
        existing.price = details.price
        saved = self.repository.save(existing)
        logger.info("updated product id=%s", saved.id)
        return saved

    def delete(self, pid: int) -> bool:
        existing = self.repository.find_by_id(pid)
        if existing is None:
            logger.debug("delete skipped, product id=%s not found", pid)
            return False
        self.repository.delete(existing)
        logger.info("deleted product id=%s", pid)
        return True
