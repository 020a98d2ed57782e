"""Data gateway: the single seam between services and the data store."""

from bonapp.gateway.base import (
    DataGateway,
    Filter,
    GatewayError,
    Order,
    Row,
    eq,
    escape_like,
    ilike,
    in_,
    lte,
    neq,
)

__all__ = [
    "DataGateway",
    "Filter",
    "GatewayError",
    "Order",
    "Row",
    "eq",
    "escape_like",
    "ilike",
    "in_",
    "lte",
    "neq",
]
