from typing import Optional
from pydantic import BaseModel
from pydantic import ConfigDict

class ProductIn(BaseModel):
    # inf/nan can't round-trip through JSON, so they are rejected (422).
    model_config = ConfigDict(allow_inf_nan=False)

    # Clients may echo an id back; it is accepted and never used.
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None

class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
