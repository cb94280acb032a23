class WorkbookError(ValueError):
    """Raised when the assessment workbook is missing a sheet or a required column."""
