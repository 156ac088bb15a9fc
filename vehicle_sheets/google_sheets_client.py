"""
This module provides the GoogleSheetsClient class for writing rows to and reading
them back from a Google Spreadsheet.
"""

import logging
from typing import List, Dict, Optional, Callable, Any

from google.auth.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
import google.auth.exceptions
import httplib2

from .config import SHEETS_SYNC_CONFIG
from .errors import AuthFlowError, SinkWriteError

logger = logging.getLogger(__name__)


class GoogleSheetsClient:
    """
    A thin wrapper around the Sheets v4 values API.

    Every request is made once. Failures are raised as SinkWriteError so the
    caller decides whether to stop.
    """

    def __init__(self, credentials: Optional[Credentials] = None, service: Optional[Any] = None):
        """
        Initializes the GoogleSheetsClient.

        Args:
            credentials (Optional[Credentials]): Authorized credentials used to build the service.
            service (Optional[Any]): An already-built Sheets service. Takes precedence over credentials.
        """
        if service is None:
            if credentials is None:
                raise ValueError("Either credentials or service must be provided.")
            service = build('sheets', 'v4', credentials=credentials)
            logger.info("Successfully authenticated with Google Sheets API.")
        self.service = service

    def _execute(self, api_call: Callable[[], Any], method_name: str) -> Any:
        """
        Executes an API call, converting failures into SinkWriteError.

        Args:
            api_call (Callable[[], Any]): The function that makes the API call.
            method_name (str): The name of the public method calling this helper, for logging.
        """
        try:
            return api_call()
        except HttpError as e:
            logger.error(f"API error for {method_name}: {e.resp.status} - {e.content}")
            raise SinkWriteError(f"{method_name} failed: {e}", status=e.resp.status) from e
        except google.auth.exceptions.GoogleAuthError as e:
            logger.error(f"Google authentication failed during {method_name}: {e}")
            raise AuthFlowError(f"{method_name} failed: {e}") from e
        except (httplib2.HttpLib2Error, OSError) as e:
            logger.error(f"Request failed for {method_name}: {e}")
            raise SinkWriteError(f"{method_name} failed: {e}") from e

    def update_range(self, spreadsheet_id: str, range_a1: str, values: List[List[Any]],
                     value_input_option: str = SHEETS_SYNC_CONFIG["value_input_option"]) -> Dict:
        """
        Overwrites the cells of `range_a1` with `values`, row-major.

        Args:
            spreadsheet_id (str): The ID of the Google Spreadsheet.
            range_a1 (str): The target range, e.g. 'Sheet2!A2:E2'.
            values (List[List[Any]]): One list of cell values per row.
            value_input_option (str): 'RAW' writes values literally, 'USER_ENTERED' parses them.

        Returns:
            Dict: The API response.

        Raises:
            SinkWriteError: If the update fails.
        """
        body = {
            'majorDimension': 'ROWS',
            'values': values
        }
        api_call = lambda: self.service.spreadsheets().values().update(
            spreadsheetId=spreadsheet_id,
            range=range_a1,
            valueInputOption=value_input_option,
            body=body
        ).execute()
        response = self._execute(api_call, "update_range")
        logger.debug(f"Updated {response.get('updatedCells', 0)} cells in {range_a1}")
        return response

    def read_range(self, spreadsheet_id: str, range_a1: str) -> List[List[Any]]:
        """
        Reads the cell values of `range_a1`.

        Returns:
            List[List[Any]]: Rows of cell values. Trailing empty rows and cells are omitted by the API.

        Raises:
            SinkWriteError: If the read fails.
        """
        api_call = lambda: self.service.spreadsheets().values().get(
            spreadsheetId=spreadsheet_id,
            range=range_a1
        ).execute()
        response = self._execute(api_call, "read_range")
        values = response.get('values', [])
        logger.info(f"Read {len(values)} rows from {range_a1}")
        return values
