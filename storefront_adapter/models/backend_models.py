"""Pydantic models for upstream backend shapes the normalizer reads."""

from typing import Optional, List, Dict, Any, Union
from pydantic import BaseModel, Field, ConfigDict


class Edge(BaseModel):
    """A ``{node}`` wrapper inside a paginated connection."""
    cursor: Optional[str] = None
    node: Any = None

    model_config = ConfigDict(extra="allow")


class Connection(BaseModel):
    """Paginated connection: ``pageInfo`` plus ``{node}``-wrapped items."""
    edges: List[Optional[Edge]] = Field(default_factory=list)
    page_info: Optional[Dict[str, Any]] = Field(None, alias="pageInfo")

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    def nodes(self) -> List[Any]:
        return [edge.node for edge in self.edges if edge is not None and edge.node is not None]


class BackendMoney(BaseModel):
    """Money as the hybrid backend reports it (``value`` instead of ``amount``)."""
    value: Optional[Union[str, float, int]] = None
    currency_code: Optional[str] = Field(None, alias="currencyCode")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class BackendPriceRange(BaseModel):
    min: Optional[BackendMoney] = None
    max: Optional[BackendMoney] = None


class BackendCategory(BaseModel):
    """A node of the hybrid backend's category tree."""
    entity_id: Optional[Union[int, str]] = Field(None, alias="entityId")
    name: Optional[str] = None
    path: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True, extra="allow")
