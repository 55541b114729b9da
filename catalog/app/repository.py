from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from .models import Product

class ProductRepository:
    """
    Generic find/save/delete over the products table.
    Bound to one request-scoped Session; commit/rollback belong to get_session.
    """

    def __init__(self, session: Session):
        self.session = session

    def find_all(self) -> List[Product]:
        # No ORDER BY: row order is whatever the database returns.
        return list(self.session.execute(select(Product)).scalars().all())

    def find_by_id(self, pid: int) -> Optional[Product]:
        return self.session.get(Product, pid)

    def save(self, product: Product) -> Product:
        """
        Insert when id is absent (the database assigns it),
        otherwise overwrite the row with the same id.
        """
        if product.id is None:
            self.session.add(product)
        else:
            product = self.session.merge(product)
        self.session.flush()
        self.session.refresh(product)
        return product

    def delete(self, product: Product) -> None:
        self.session.delete(product)
        self.session.flush()

    def count(self) -> int:
        return self.session.execute(select(func.count()).select_from(Product)).scalar_one()
