# Common utilities
from .config_loader import load_config
from .csv_utils import rows_to_csv, write_csv
from .log_config import setup_logging
from .settings import AppSettings, OAuthCredentials, load_settings
