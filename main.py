"""
Car Rental Desk - Main Entry Point
"""
import tkinter as tk

from cr_gui import CarRentalApp
from cr_utils import load_config, seed_fleet
from logging_config import setup_logging
from rental_ledger import RentalLedger


def main():
    """
    Application entry point. Loads settings, seeds the fleet into a fresh
    ledger and hands it to the window.
    """
    config_data = load_config()
    settings = config_data['settings']
    logger = setup_logging(settings.get('log_level', 'INFO'))

    ledger = RentalLedger(seed_fleet(), customer_prefix=settings.get('customer_id_prefix', 'CUS'))

    root = tk.Tk()
    CarRentalApp(root, ledger, config_data)
    logger.info("Car Rental Desk started")
    root.mainloop()


if __name__ == "__main__":
    main()
