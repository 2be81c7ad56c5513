"""
statement_core.config
Central configuration/constants.
"""
from __future__ import annotations

# ICICI detailed statement header, left to right
HEADER_SIGNATURE = (
    "S No.",
    "Value Date",
    "Transaction Date",
    "Cheque Number",
    "Transaction Remarks",
    "Withdrawal Amount (INR )",
    "Deposit Amount (INR )",
    "Balance (INR )",
)

SERIAL_LABEL = HEADER_SIGNATURE[0]
VALUE_DATE_LABEL = HEADER_SIGNATURE[1]
TXN_DATE_LABEL = HEADER_SIGNATURE[2]
CHEQUE_LABEL = HEADER_SIGNATURE[3]
REMARKS_LABEL = HEADER_SIGNATURE[4]
WITHDRAWAL_LABEL = HEADER_SIGNATURE[5]
DEPOSIT_LABEL = HEADER_SIGNATURE[6]
BALANCE_LABEL = HEADER_SIGNATURE[7]

# header may start in any of the first N columns (decorative/merged leading cells)
MAX_START_COLUMN = 4

# export column order
CANONICAL_COLUMNS = (
    "Date",
    "Narration",
    "Item",
    "Category",
    "Place",
    "Freq",
    "For",
    "MOP",
    "Amt(Dr)",
    "Chq./Ref.No.",
    "Value Dt",
    "Amt(Cr)",
)

OUTPUT_SHEET_NAME = "FormattedData"

RESET_MARKER = "RESET"

# batch mode
BATCH_GLOB = "ICICI_DC_*.xls"
MOP_SEGMENTS = 3

CONVERTED_SUFFIX = "_ConvertedFromXls"
TRANSFORMED_SUFFIX = "_Transformed"
XLSX_EXT = ".xlsx"

# LibreOffice bridge
SOFFICE_BINARY = "soffice"
SOFFICE_TIMEOUT_SEC = 120

DEFAULT_LOG_DIR = "output/logs"
