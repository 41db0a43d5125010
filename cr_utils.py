"""
Car Rental Desk - Utilities Module
Configuration management, fleet seed and resource path handling
"""
import sys
import os
import json
import copy

from logging_config import get_logger
from rental_rules import Car

logger = get_logger(__name__)

APP_TITLE = "Car Rental System"
CONFIG_FILE = 'car_rental_config.json'

DEFAULT_SETTINGS = {
    "currency_symbol": "$",
    "customer_id_prefix": "CUS",       # Generated ids look like CUS1, CUS2, ...
    "window_geometry": "800x600",
    "report_folder": "",               # Last folder used for Excel exports
    "log_level": "INFO"
}

# (car_id, brand, model, price per day)
DEFAULT_FLEET = [
    ("C001", "Toyota", "Camry", 60.0),
    ("C002", "Honda", "Accord", 70.0),
    ("C003", "Mahindra", "Thar", 150.0),
    ("C004", "Toyota", "Corolla", 30.0),
    ("C005", "Ford", "Focus", 45.0),
]


def resource_path(relative_path):
    """
    Get absolute path to resource file. Works for both development and PyInstaller bundled builds.

    Args:
        relative_path (str): Path relative to this module or bundle root

    Returns:
        str: Absolute path to the resource
    """
    try:
        # PyInstaller creates a temp folder and stores path in _MEIPASS
        base_path = sys._MEIPASS
    except AttributeError:
        base_path = os.path.dirname(os.path.abspath(__file__))

    return os.path.join(base_path, relative_path)


def seed_fleet(fleet=None):
    """
    Build Car objects from (id, brand, model, price) tuples.

    Args:
        fleet (list, optional): Seed rows, DEFAULT_FLEET when omitted

    Returns:
        list: Fresh Car objects, all available
    """
    rows = DEFAULT_FLEET if fleet is None else fleet
    return [Car(car_id, brand, model, price) for car_id, brand, model, price in rows]


def _with_defaults(settings):
    merged = copy.deepcopy(DEFAULT_SETTINGS)
    if isinstance(settings, dict):
        merged.update(settings)
    return merged


def load_config(config_file=CONFIG_FILE):
    """
    Load application configuration from JSON file.
    Returns default settings if file doesn't exist or is corrupted.

    Returns:
        dict: Configuration dictionary with 'settings' key
    """
    if not os.path.exists(config_file):
        return {'settings': _with_defaults(None)}

    try:
        with open(config_file, 'r') as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Could not read {config_file}, using defaults: {e}")
        return {'settings': _with_defaults(None)}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring malformed config in {config_file}")
        return {'settings': _with_defaults(None)}

    # Ensure required structure exists
    data['settings'] = _with_defaults(data.get('settings'))
    return data


def save_config(data, config_file=CONFIG_FILE):
    """
    Save application configuration to JSON file.
    Write failures are logged, not raised, so the UI keeps running.

    Args:
        data (dict): Configuration dictionary to save

    Returns:
        bool: True if the file was written
    """
    try:
        with open(config_file, 'w') as f:
            json.dump(data, f, indent=4)
        return True
    except (IOError, OSError) as e:
        logger.warning(f"Could not save config to {config_file}: {e}")
        return False
