"""
Tests for the GoogleSheetsClient class.
"""

import unittest
from unittest.mock import patch, MagicMock

import google.auth.exceptions
import httplib2
from googleapiclient.errors import HttpError
from vehicle_sheets.google_sheets_client import GoogleSheetsClient
from vehicle_sheets.errors import AuthFlowError, SinkWriteError

# Helper to create HttpError instances
def create_http_error(status_code: int, reason: str = "Error"):
    resp = MagicMock()
    resp.status = status_code
    resp.reason = reason
    # HttpError expects content to be bytes
    return HttpError(resp=resp, content=bytes(reason, 'utf-8'))

class TestGoogleSheetsClient(unittest.TestCase):
    """
    Test cases for the GoogleSheetsClient class.
    """

    def setUp(self):
        """Set up a client around a mocked Sheets service."""
        self.mock_service = MagicMock()
        # Reach the values() resource without recording extra calls on the mocks
        self.values_api = self.mock_service.spreadsheets.return_value.values.return_value
        self.client = GoogleSheetsClient(service=self.mock_service)

    @patch('vehicle_sheets.google_sheets_client.build')
    def test_init_builds_service_from_credentials(self, mock_build):
        """The Sheets v4 service is built from the given credentials."""
        mock_creds = MagicMock()
        mock_build.return_value = self.mock_service

        client = GoogleSheetsClient(credentials=mock_creds)

        mock_build.assert_called_once_with('sheets', 'v4', credentials=mock_creds)
        self.assertIs(client.service, self.mock_service)

    @patch('vehicle_sheets.google_sheets_client.build')
    def test_init_prefers_injected_service(self, mock_build):
        client = GoogleSheetsClient(credentials=MagicMock(), service=self.mock_service)
        mock_build.assert_not_called()
        self.assertIs(client.service, self.mock_service)

    def test_init_requires_credentials_or_service(self):
        with self.assertRaises(ValueError):
            GoogleSheetsClient()

    # --- Tests for update_range ---
    def test_update_range_success(self):
        """update_range writes one row-major value grid with RAW input."""
        self.values_api.update.return_value.execute.return_value = {'updatedCells': 5}

        response = self.client.update_range("sheet_id", "Sheet2!A2:E2", [["Toyota", "m1", "", "Corolla", "c1"]])

        self.assertEqual(response, {'updatedCells': 5})
        self.values_api.update.assert_called_once_with(
            spreadsheetId="sheet_id",
            range="Sheet2!A2:E2",
            valueInputOption="RAW",
            body={'majorDimension': 'ROWS', 'values': [["Toyota", "m1", "", "Corolla", "c1"]]}
        )

    def test_update_range_custom_value_input_option(self):
        self.values_api.update.return_value.execute.return_value = {}
        self.client.update_range("sheet_id", "Sheet2!A1:E1", [["a"]], value_input_option="USER_ENTERED")
        _, kwargs = self.values_api.update.call_args
        self.assertEqual(kwargs['valueInputOption'], "USER_ENTERED")

    def test_update_range_http_error_raises_sink_write_error(self):
        """An HttpError is not retried and surfaces as SinkWriteError with its status."""
        self.values_api.update.return_value.execute.side_effect = create_http_error(429, "Rate Limit")

        with patch('vehicle_sheets.google_sheets_client.logger.error') as mock_logger_error:
            with self.assertRaises(SinkWriteError) as ctx:
                self.client.update_range("sheet_id", "Sheet2!A2:E2", [["x"]])

        self.assertEqual(ctx.exception.status, 429)
        self.assertEqual(self.values_api.update.return_value.execute.call_count, 1)
        mock_logger_error.assert_called_once_with("API error for update_range: 429 - b'Rate Limit'")

    def test_update_range_transport_error_raises_sink_write_error(self):
        self.values_api.update.return_value.execute.side_effect = httplib2.ServerNotFoundError("no route")

        with patch('vehicle_sheets.google_sheets_client.logger'):
            with self.assertRaises(SinkWriteError) as ctx:
                self.client.update_range("sheet_id", "Sheet2!A2:E2", [["x"]])
        self.assertIsNone(ctx.exception.status)

    def test_update_range_auth_error_raises_auth_flow_error(self):
        self.values_api.update.return_value.execute.side_effect = google.auth.exceptions.RefreshError("revoked")

        with patch('vehicle_sheets.google_sheets_client.logger'):
            with self.assertRaises(AuthFlowError):
                self.client.update_range("sheet_id", "Sheet2!A2:E2", [["x"]])

    # --- Tests for read_range ---
    def test_read_range_success(self):
        self.values_api.get.return_value.execute.return_value = {
            'values': [["make name", "id", "", "model name", "id"], ["Toyota", "m1", "", "Corolla", "c1"]]
        }

        result = self.client.read_range("sheet_id", "Sheet2!A1:E2")

        self.assertEqual(len(result), 2)
        self.assertEqual(result[1][0], "Toyota")
        self.values_api.get.assert_called_once_with(spreadsheetId="sheet_id", range="Sheet2!A1:E2")

    def test_read_range_empty(self):
        """The API omits 'values' for an empty range."""
        self.values_api.get.return_value.execute.return_value = {'range': "Sheet2!A1:E3"}
        self.assertEqual(self.client.read_range("sheet_id", "Sheet2!A1:E3"), [])

    def test_read_range_failure(self):
        self.values_api.get.return_value.execute.side_effect = create_http_error(404, "Not Found")

        with patch('vehicle_sheets.google_sheets_client.logger'):
            with self.assertRaises(SinkWriteError) as ctx:
                self.client.read_range("sheet_id", "Missing!A1:E3")
        self.assertEqual(ctx.exception.status, 404)


if __name__ == '__main__':
    unittest.main()
