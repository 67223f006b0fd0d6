from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional


def accepts(name: str) -> AliasChoices:
    # Clients may send camel/lower-case or PascalCase keys
    return AliasChoices(name, name.capitalize())


class ProductRequest(BaseModel):
    # Create ignores the id; update compares it against the route id
    id: int = Field(default=0, validation_alias=accepts("id"))
    name: str = Field(validation_alias=accepts("name"))
    description: Optional[str] = Field(default=None, validation_alias=accepts("description"))
    price: float = Field(validation_alias=accepts("price"))
    category: Optional[str] = Field(default=None, validation_alias=accepts("category"))


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str]
    price: float
    category: Optional[str]
