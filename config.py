import os
from dotenv import load_dotenv

# Load environment variables from .env file(s)
load_dotenv()

basedir = os.path.abspath(os.path.dirname(__file__))


def _env_bool(name: str, default: str = 'false') -> bool:
    return os.environ.get(name, default).lower() in ['true', 'on', '1']


class Config:
    # Directory the console loads CSV catalogues from
    DATA_DIR = os.environ.get('LENDING_DATA_DIR') or os.path.join(basedir, 'data')

    # Circulation rules
    LOAN_DAYS = int(os.environ.get('LOAN_DAYS', 14))
    FINE_PENCE_PER_DAY = int(os.environ.get('FINE_PENCE_PER_DAY', 50))

    # Reject reservations for media ids that are not in the catalogue
    RESERVATION_REQUIRES_ITEM = _env_bool('RESERVATION_REQUIRES_ITEM')

    # "Today" for due dates and fines is taken in this timezone
    TIMEZONE = os.environ.get('TIMEZONE') or 'UTC'

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'ERROR').upper()
