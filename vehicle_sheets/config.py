"""
This file contains configuration settings for the vehicle sheets sync.

Attributes:
    SHEETS_SYNC_CONFIG (dict): A dictionary containing configuration parameters
        for the sync run.
        - "scopes" (list): Authorization scopes required for API access.
        - "credentials_file" (str): OAuth client secrets JSON downloaded from Google Cloud.
                                      This file needs to be created by the user.
        - "token_file" (str): Where the authorized user token is cached after the first
                              consent flow.
        - "data_file" (str): The YAML document listing makes and models.
        - "spreadsheet_id" (str): The target Google Spreadsheet ID.
        - "sheet_name" (str): The worksheet (tab) the rows are written to.
        - "pace_every" (int): Pause after every Nth update call.
        - "pace_delay_seconds" (float): How long each pause lasts.
        - "value_input_option" (str): How the Sheets API interprets written values.
"""

SHEETS_SYNC_CONFIG = {
    "scopes": ["https://www.googleapis.com/auth/spreadsheets"],
    "credentials_file": "credentials.json",  # This file will need to be created by the user
    "token_file": "token.json",
    "data_file": "vehicles.yaml",
    "spreadsheet_id": "1OxUGr5qJ835LgPa45J93Iu1adKGNVdPTWgT7QMnKdww",
    "sheet_name": "Sheet2",
    "pace_every": 10,
    "pace_delay_seconds": 2.0,
    "value_input_option": "RAW"
}
