"""
Library lending core.

Use ``create_library()`` to build a Library wired with the configured loan and
fine policies.
"""

import logging
from typing import Optional

from config import Config

from .domain.policies import StandardFinePolicy, StandardLoanPolicy
from .services.library_service import Library
from .utils.clock import Clock, make_clock

logger = logging.getLogger(__name__)


def create_library(config_class=Config, clock: Optional[Clock] = None) -> Library:
    # Configure Python logging level from LOG_LEVEL (default ERROR)
    log_level_name = str(getattr(config_class, 'LOG_LEVEL', 'ERROR')).upper()
    log_level = getattr(logging, log_level_name, logging.ERROR)
    logging.getLogger().setLevel(log_level)

    loan_policy = StandardLoanPolicy(config_class.LOAN_DAYS)
    fine_policy = StandardFinePolicy(config_class.FINE_PENCE_PER_DAY)
    library = Library(
        loan_policy,
        fine_policy,
        clock=clock or make_clock(config_class.TIMEZONE),
        require_registered_item=getattr(config_class, 'RESERVATION_REQUIRES_ITEM', False),
    )
    logger.info(f"Library created with {loan_policy!r}, {fine_policy!r}, timezone {config_class.TIMEZONE}")
    return library


__all__ = ['create_library', 'Library']
