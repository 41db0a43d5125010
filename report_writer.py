"""
Car Rental Desk - Report Writer Module

Exports a snapshot of the fleet and the active rentals to a formatted
Excel workbook. The workbook is an export only; the desk never reads it back.
"""
import os
from datetime import datetime

import pandas as pd

from logging_config import get_logger
from rental_desk import CAR_COLUMNS, STATUS_AVAILABLE, STATUS_RENTED

logger = get_logger(__name__)

RENTAL_REPORT_COLUMNS = ['Car ID', 'Brand', 'Model', 'Customer ID', 'Customer', 'Days',
                         'Price per Day', 'Total Price']


def build_fleet_frame(ledger):
    """One row per car in seed order, prices as numbers."""
    rows = [
        {
            'Car ID': car.car_id,
            'Brand': car.brand,
            'Model': car.model,
            'Price per Day': car.base_price_per_day,
            'Status': STATUS_AVAILABLE if car.available else STATUS_RENTED,
        }
        for car in ledger.list_cars()
    ]
    return pd.DataFrame(rows, columns=list(CAR_COLUMNS))


def build_rentals_frame(ledger):
    """One row per active rental, with the customer id and total price."""
    rows = [
        {
            'Car ID': r.car.car_id,
            'Brand': r.car.brand,
            'Model': r.car.model,
            'Customer ID': r.customer.customer_id,
            'Customer': r.customer.name,
            'Days': r.days,
            'Price per Day': r.car.base_price_per_day,
            'Total Price': r.total_price,
        }
        for r in ledger.list_rentals()
    ]
    return pd.DataFrame(rows, columns=RENTAL_REPORT_COLUMNS)


def build_summary(ledger, rentals_df):
    """
    Headline numbers for the Summary sheet.

    Args:
        ledger: RentalLedger the report is taken from
        rentals_df: Frame from build_rentals_frame for the same ledger

    Returns:
        list: (label, value) pairs
    """
    fleet_size = len(ledger.list_cars())
    available = len(ledger.list_available_cars())
    open_revenue = float(rentals_df['Total Price'].sum()) if not rentals_df.empty else 0.0
    return [
        ('Fleet Size', fleet_size),
        ('Available', available),
        ('Rented', fleet_size - available),
        ('Active Rentals', len(rentals_df)),
        ('Open Rental Value', open_revenue),
    ]


def write_rental_report(ledger, output_dir='.', log_func=None):
    """
    Write the fleet and active rentals to Rental_Report_<timestamp>.xlsx.

    Args:
        ledger: RentalLedger to snapshot
        output_dir (str): Folder for the workbook (created if missing)
        log_func (callable, optional): Progress messages for the UI

    Returns:
        str: Path of the written workbook
    """
    if log_func is None:
        log_func = logger.info

    os.makedirs(output_dir, exist_ok=True)
    output_filename = os.path.join(
        output_dir, f'Rental_Report_{datetime.now().strftime("%Y-%m-%d_%H%M")}.xlsx'
    )
    log_func(f"Writing Excel: {output_filename}...")

    fleet_df = build_fleet_frame(ledger)
    rentals_df = build_rentals_frame(ledger)

    with pd.ExcelWriter(output_filename, engine='xlsxwriter') as writer:
        workbook = writer.book

        border_col = '#E2E8F0'
        fmt_header = workbook.add_format({'bold': True, 'bg_color': '#1E293B', 'font_color': '#FFFFFF', 'border': 1, 'border_color': border_col, 'align': 'center', 'valign': 'vcenter'})
        fmt_curr = workbook.add_format({'num_format': '$#,##0.00', 'border': 1, 'border_color': border_col})
        fmt_label = workbook.add_format({'bg_color': '#F1F5F9', 'font_color': '#334155', 'border': 1, 'bold': True})
        fmt_value = workbook.add_format({'border': 1, 'border_color': border_col, 'align': 'center'})
        fmt_rented = workbook.add_format({'bg_color': '#FEE2E2', 'font_color': '#991B1B', 'border': 1, 'border_color': border_col})
        fmt_available = workbook.add_format({'bg_color': '#DCFCE7', 'font_color': '#166534', 'border': 1, 'border_color': border_col})

        # === FLEET SHEET ===
        fleet_df.to_excel(writer, sheet_name='Fleet', index=False)
        ws = writer.sheets['Fleet']
        for col_i, name in enumerate(fleet_df.columns):
            ws.write(0, col_i, name, fmt_header)
        ws.set_column(0, 0, 10)
        ws.set_column(1, 2, 18)
        ws.set_column(3, 3, 14, fmt_curr)
        ws.set_column(4, 4, 12)
        if len(fleet_df):
            last = len(fleet_df)
            ws.conditional_format(1, 4, last, 4, {'type': 'text', 'criteria': 'containing', 'value': STATUS_RENTED, 'format': fmt_rented})
            ws.conditional_format(1, 4, last, 4, {'type': 'text', 'criteria': 'containing', 'value': STATUS_AVAILABLE, 'format': fmt_available})
        ws.freeze_panes(1, 0)

        # === ACTIVE RENTALS SHEET ===
        rentals_df.to_excel(writer, sheet_name='Active Rentals', index=False)
        ws = writer.sheets['Active Rentals']
        for col_i, name in enumerate(rentals_df.columns):
            ws.write(0, col_i, name, fmt_header)
        ws.set_column(0, 0, 10)
        ws.set_column(1, 2, 18)
        ws.set_column(3, 3, 12)
        ws.set_column(4, 4, 24)
        ws.set_column(5, 5, 8)
        ws.set_column(6, 7, 14, fmt_curr)
        ws.freeze_panes(1, 0)

        # === SUMMARY SHEET ===
        ws = workbook.add_worksheet('Summary')
        ws.write(0, 0, 'Generated', fmt_label)
        ws.write(0, 1, datetime.now().strftime('%Y-%m-%d %H:%M'), fmt_value)
        for row_i, (label, value) in enumerate(build_summary(ledger, rentals_df), start=1):
            ws.write(row_i, 0, label, fmt_label)
            ws.write(row_i, 1, value, fmt_curr if isinstance(value, float) else fmt_value)
        ws.set_column(0, 0, 22)
        ws.set_column(1, 1, 18)

    log_func(f"Report written: {output_filename}")
    return output_filename
