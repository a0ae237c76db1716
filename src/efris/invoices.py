"""
Invoice and credit note endpoints.

Payloads are plain mappings or pydantic models; they are serialized as-is.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from efris.decoding import JSON, Decoder, as_model
from efris.interfaces import InterfaceCode
from efris.models.paging import PagedResult
from efris.models.result import Result

Send = Callable[..., Awaitable[Result]]

PAGED = as_model(PagedResult)


class InvoicesAPI:
    def __init__(self, send: Send):
        self._send = send

    async def fiscalize(self, invoice: Any, decoder: Decoder = JSON) -> Result:
        """Upload an invoice for fiscalisation (T109)."""
        return await self._send(InterfaceCode.UPLOAD_INVOICE, invoice, decoder)

    async def retrieve(self, invoice_no: str, decoder: Decoder = JSON) -> Result:
        """Invoice details by number (T108)."""
        return await self._send(InterfaceCode.INVOICE_DETAILS, {"invoiceNo": invoice_no}, decoder)

    async def query(self, query: Any) -> Result:
        """Paged invoice query (T106)."""
        return await self._send(InterfaceCode.QUERY_INVOICES, query, PAGED)

    async def issue_credit_note(self, credit_note: Any, decoder: Decoder = JSON) -> Result:
        """Credit note application (T110)."""
        return await self._send(InterfaceCode.CREDIT_NOTE_APPLICATION, credit_note, decoder)

    async def query_credit_notes(self, query: Any) -> Result:
        """Paged credit note query (T111)."""
        return await self._send(InterfaceCode.QUERY_CREDIT_NOTES, query, PAGED)

    async def retrieve_credit_note(self, credit_note_id: str, decoder: Decoder = JSON) -> Result:
        """Credit note application details (T112)."""
        return await self._send(InterfaceCode.CREDIT_NOTE_DETAILS, {"id": credit_note_id}, decoder)

    async def cancel_credit_note(self, cancellation: Any) -> Result:
        """Cancel a credit note application (T114)."""
        return await self._send(InterfaceCode.CANCEL_CREDIT_NOTE, cancellation, JSON)
