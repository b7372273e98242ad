import os
from dotenv import load_dotenv

# Load from .env if it exists (useful for local development)
load_dotenv()

PLACEHOLDER_SPREADSHEET_ID = "YOUR_SPREADSHEET_ID_HERE"

# Default data source ("MULTIPLE STUDIOS")
GOOGLE_SPREADSHEET_ID = os.getenv(
    "GOOGLE_SPREADSHEET_ID", "1CphjZ4n9_Ogrxt_NJOLUECl0iAdZ8ExUm1R8wpfWuW8"
)
GOOGLE_SHEET_NAME = os.getenv("GOOGLE_SHEET_NAME", "Sheet1")

# Seeded "I MUSICIAN" data source
IMUSICIAN_SPREADSHEET_ID = os.getenv(
    "IMUSICIAN_SPREADSHEET_ID", "10acsNREF-eYf2XZ2yfCmO0s4p3g6fobUrLvzJTCg6zE"
)
IMUSICIAN_SHEET_NAME = os.getenv("IMUSICIAN_SHEET_NAME", "I MUSICIAN")

# Drive folders for uploaded attachments
ARTWORK_FOLDER_ID = os.getenv(
    "ARTWORK_FOLDER_ID", "1tlVD4NrIzjncLQb44F1dl37sRGR4Gyb1DX_lg6UIR-Zpd-uCkR9Btbc7r95l1mm1toelD9G1"
)
AUDIO_FOLDER_ID = os.getenv(
    "AUDIO_FOLDER_ID", "1TWFQdR0KgkxSEtBPagwOg6j-0JWD2tNhwl0-FS9noZjcu9Tb68OmlD2gCVoGfYRk7-aGTUad"
)

GOOGLE_CREDENTIALS_FILE = os.getenv("GOOGLE_CREDENTIALS_FILE", "credentials.json")
SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets",
    "https://www.googleapis.com/auth/drive.file",
]

# Local persisted UI preferences (data sources, active source, theme)
CONFIG_STORE_PATH = os.getenv("CONFIG_STORE_PATH", os.path.join(os.getcwd(), "catalog_state.json"))

TIMEZONE = os.getenv("TIMEZONE", "Asia/Jakarta")
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# --- WEB ---
FLASK_SECRET_KEY = os.getenv("FLASK_SECRET_KEY", "dev-release-catalog")
FLASK_HOST = os.getenv("FLASK_HOST", "0.0.0.0")
FLASK_PORT = int(os.getenv("FLASK_PORT", "5000"))
FLASK_DEBUG = os.getenv("FLASK_DEBUG", "false").lower() in ("1", "true", "yes")
