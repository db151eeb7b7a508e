from timebill.infrastructure.export.excel_service import XLSX_MEDIA_TYPE, ExcelExporter

__all__ = ["ExcelExporter", "XLSX_MEDIA_TYPE"]
