"""
Goods/services configuration and stock endpoints.
"""

from __future__ import annotations

from typing import Any, Optional

from efris.decoding import JSON, Decoder
from efris.interfaces import InterfaceCode
from efris.invoices import PAGED, Send
from efris.models.result import Result


class GoodsAPI:
    def __init__(self, send: Send):
        self._send = send

    async def configure(self, products: list[Any]) -> Result:
        """Upload or update goods and services (T130). Returns per-item outcomes."""
        return await self._send(InterfaceCode.UPLOAD_GOODS, products, JSON)

    async def query(
        self, page_no: int = 1, page_size: int = 10,
        goods_name: Optional[str] = None, goods_code: Optional[str] = None,
    ) -> Result:
        """Paged goods query (T127)."""
        query: dict[str, Any] = {"pageNo": str(page_no), "pageSize": str(page_size)}
        if goods_name:
            query["goodsName"] = goods_name
        if goods_code:
            query["goodsCode"] = goods_code
        return await self._send(InterfaceCode.QUERY_GOODS, query, PAGED)

    async def maintain_stock(self, stock: Any, decoder: Decoder = JSON) -> Result:
        """Stock in / stock adjustment (T131)."""
        return await self._send(InterfaceCode.MAINTAIN_STOCK, stock, decoder)

    async def transfer_stock(self, transfer: Any, items: list[Any], decoder: Decoder = JSON) -> Result:
        """Transfer stock between branches (T139)."""
        return await self._send(
            InterfaceCode.TRANSFER_STOCK,
            {"goodsStockTransfer": transfer, "goodsStockTransferItem": items},
            decoder,
        )
