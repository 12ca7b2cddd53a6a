"""
Cost Manager - Configuration and Constants

PURPOSE: Central configuration management for the application
SCOPE: Application settings, constants, and environment variables
DEPENDENCIES: None (foundational module)
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Dict


@dataclass
class AppConfig:
    """Application configuration constants."""
    DB_NAME: str = 'costsdb'
    DB_VERSION: int = 1
    DATA_DIR: str = None
    RATES_URL: str = None
    RATES_TIMEOUT: float = 10.0
    SUPPORTED_CURRENCIES: List[str] = None
    CATEGORIES: List[str] = None
    DEFAULT_RATES: Dict[str, float] = None

    def __post_init__(self):
        if self.DATA_DIR is None:
            self.DATA_DIR = os.environ.get('COST_MANAGER_DATA_DIR', '.')
        self.DB_NAME = os.environ.get('COST_MANAGER_DB_NAME', self.DB_NAME)
        if self.RATES_URL is None:
            self.RATES_URL = os.environ.get(
                'COST_MANAGER_RATES_URL', 'http://localhost:8000/rates.json'
            )
        if self.SUPPORTED_CURRENCIES is None:
            self.SUPPORTED_CURRENCIES = ['USD', 'ILS', 'GBP', 'EURO']
        if self.CATEGORIES is None:
            self.CATEGORIES = ['FOOD', 'CAR', 'EDUCATION', 'HEALTH', 'OTHER']
        if self.DEFAULT_RATES is None:
            # 1 USD = X <currency>
            self.DEFAULT_RATES = {'USD': 1, 'ILS': 3.5, 'GBP': 0.8, 'EURO': 0.9}


# Global configuration instance
config = AppConfig()

# Set up logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)
