from timebill.infrastructure.pdf.pdf_service import InvoicePdfRenderer

__all__ = ["InvoicePdfRenderer"]
