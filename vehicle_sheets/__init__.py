# __init__.py
from .errors import (
    SheetsSyncError, ConfigReadError, ConfigParseError,
    AuthConfigError, AuthFlowError, SinkWriteError
)
from .vehicle_data import Make, Model, ModelGroup, parse_vehicle_document, load_vehicle_file, assemble_makes
from .row_layout import Row, build_header_row, build_rows, closed_form_row_index
from .google_sheets_client import GoogleSheetsClient
from .dispatcher import SinkConfig, FixedWindowPacing, UpdateOutcome, DispatchResult, UpdateDispatcher, verify_rows
