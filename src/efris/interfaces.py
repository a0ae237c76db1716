"""
EFRIS interface codes: the server-side operation selector carried in globalInfo.
"""

SUCCESS_RETURN_CODE = "00"


class InterfaceCode:
    """Interface codes used by this client."""
    KEY_EXCHANGE = "T104"
    QUERY_INVOICES = "T106"
    INVOICE_DETAILS = "T108"
    UPLOAD_INVOICE = "T109"
    CREDIT_NOTE_APPLICATION = "T110"
    QUERY_CREDIT_NOTES = "T111"
    CREDIT_NOTE_DETAILS = "T112"
    CANCEL_CREDIT_NOTE = "T114"
    TAXPAYER_INFO = "T119"
    QUERY_GOODS = "T127"
    UPLOAD_GOODS = "T130"
    MAINTAIN_STOCK = "T131"
    TRANSFER_STOCK = "T139"


BOOTSTRAP_INTERFACE_CODE = InterfaceCode.KEY_EXCHANGE
