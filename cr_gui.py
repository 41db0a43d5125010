"""
Car Rental Desk - GUI Module
Tkinter-based user interface for renting and returning cars
"""
import tkinter as tk
from tkinter import ttk, filedialog, messagebox
import os
import subprocess
import sys

from cr_utils import APP_TITLE, DEFAULT_SETTINGS, resource_path, save_config
from logging_config import get_logger
from rental_desk import CAR_COLUMNS, RENTAL_COLUMNS, RentalDesk
from rental_rules import RentalError
from report_writer import write_rental_report

logger = get_logger(__name__)


class CarRentalApp:
    """Main window: a 'Rent a Car' tab and a 'Return a Car' tab over one ledger."""

    def __init__(self, root, ledger, config_data=None):
        """
        Initialize the application window and UI elements.

        Args:
            root (tk.Tk): Root Tkinter window
            ledger (RentalLedger): The ledger this window operates on
            config_data (dict, optional): Loaded configuration with 'settings' key
        """
        self.root = root
        self.config_data = config_data or {'settings': dict(DEFAULT_SETTINGS)}
        settings = self.config_data['settings']

        self.desk = RentalDesk(ledger, settings.get('currency_symbol', '$'))

        self.root.title(APP_TITLE)
        self.root.geometry(settings.get('window_geometry', '800x600'))

        try:
            icon_path = resource_path("icon.ico")
            if os.path.exists(icon_path):
                self.root.iconbitmap(icon_path)
        except (OSError, tk.TclError):
            # Icon file missing or invalid format
            pass

        style = ttk.Style()
        style.theme_use('clam')
        style.configure("TButton", padding=6, font=('Segoe UI', 10))
        style.configure("Total.TLabel", font=('Segoe UI', 11, 'bold'), foreground="#2E8B57")

        self.customer_name = tk.StringVar()
        self.days = tk.StringVar()
        self.total = tk.StringVar(value=self.desk.quote(None, None))

        self.create_widgets()
        self.refresh_all()

        self.days.trace_add('write', lambda *_: self.update_total_price())

    def create_widgets(self):
        """Build the notebook with both tabs."""
        notebook = ttk.Notebook(self.root)
        notebook.pack(fill=tk.BOTH, expand=True)
        notebook.add(self.create_rent_tab(notebook), text="Rent a Car")
        notebook.add(self.create_return_tab(notebook), text="Return a Car")

    def make_table(self, parent, columns):
        """
        Create a read-only, single-select table with a vertical scrollbar.

        Args:
            parent: Parent widget
            columns (tuple): Column headings

        Returns:
            ttk.Treeview
        """
        frame = ttk.Frame(parent)
        frame.pack(fill=tk.BOTH, expand=True)
        tree = ttk.Treeview(frame, columns=columns, show='headings', selectmode='browse')
        for col in columns:
            tree.heading(col, text=col)
            tree.column(col, width=120, anchor='w')
        scroll = ttk.Scrollbar(frame, orient='vertical', command=tree.yview)
        tree.configure(yscrollcommand=scroll.set)
        tree.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)
        scroll.pack(side=tk.RIGHT, fill=tk.Y)
        return tree

    def create_rent_tab(self, notebook):
        panel = ttk.Frame(notebook, padding=10)

        self.car_table = self.make_table(panel, CAR_COLUMNS)
        self.car_table.bind('<<TreeviewSelect>>', lambda _e: self.update_total_price())

        inputs = ttk.LabelFrame(panel, text="Rental Details", padding=10)
        inputs.pack(fill=tk.X, pady=(10, 0))

        ttk.Label(inputs, text="Customer Name:").grid(row=0, column=0, sticky='w', padx=5, pady=5)
        ttk.Entry(inputs, textvariable=self.customer_name, width=30).grid(row=0, column=1, sticky='w', padx=5, pady=5)

        ttk.Label(inputs, text="Rental Days:").grid(row=1, column=0, sticky='w', padx=5, pady=5)
        ttk.Entry(inputs, textvariable=self.days, width=10).grid(row=1, column=1, sticky='w', padx=5, pady=5)

        ttk.Label(inputs, text="Total Price:").grid(row=2, column=0, sticky='w', padx=5, pady=5)
        ttk.Label(inputs, textvariable=self.total, style="Total.TLabel").grid(row=2, column=1, sticky='w', padx=5, pady=5)

        buttons = ttk.Frame(inputs)
        buttons.grid(row=3, column=0, columnspan=2, sticky='w', pady=(5, 0))
        ttk.Button(buttons, text="Refresh", command=self.refresh_car_list).pack(side=tk.LEFT, padx=5)
        ttk.Button(buttons, text="Rent Car", command=self.rent_car).pack(side=tk.LEFT, padx=5)
        ttk.Button(buttons, text="Export Report", command=self.export_report).pack(side=tk.LEFT, padx=5)

        return panel

    def create_return_tab(self, notebook):
        panel = ttk.Frame(notebook, padding=10)

        self.rented_table = self.make_table(panel, RENTAL_COLUMNS)

        buttons = ttk.Frame(panel)
        buttons.pack(pady=(10, 0))
        ttk.Button(buttons, text="Return Selected Car", command=self.return_car).pack(side=tk.LEFT, padx=5)
        ttk.Button(buttons, text="Refresh", command=self.refresh_rented_car_list).pack(side=tk.LEFT, padx=5)

        return panel

    # === TABLE REFRESH ===

    @staticmethod
    def _fill(tree, rows):
        tree.delete(*tree.get_children())
        for row in rows:
            # Car ids are unique in both tables, so they double as row ids
            tree.insert('', tk.END, iid=row[0], values=row)

    @staticmethod
    def _selected_id(tree):
        selection = tree.selection()
        return selection[0] if selection else None

    def refresh_car_list(self):
        self._fill(self.car_table, self.desk.car_rows())
        self.update_total_price()

    def refresh_rented_car_list(self):
        self._fill(self.rented_table, self.desk.rental_rows())

    def refresh_all(self):
        self.refresh_car_list()
        self.refresh_rented_car_list()

    def update_total_price(self):
        self.total.set(self.desk.quote(self._selected_id(self.car_table), self.days.get()))

    # === ACTIONS ===

    def rent_car(self):
        """Rent the selected car to the customer typed in the form."""
        try:
            result = self.desk.rent(
                self._selected_id(self.car_table),
                self.customer_name.get(),
                self.days.get()
            )
        except RentalError as e:
            messagebox.showwarning(APP_TITLE, self.desk.describe_error(e))
            return

        messagebox.showinfo(APP_TITLE, result.message)
        self.customer_name.set("")
        self.days.set("")
        self.refresh_all()

    def return_car(self):
        """Return the car on the selected rental row."""
        try:
            result = self.desk.return_(self._selected_id(self.rented_table))
        except RentalError as e:
            messagebox.showwarning(APP_TITLE, self.desk.describe_error(e))
            return

        messagebox.showinfo(APP_TITLE, result.message)
        self.refresh_all()

    def export_report(self):
        """Write the Excel report to a chosen folder and offer to open it."""
        settings = self.config_data['settings']
        folder = filedialog.askdirectory(
            title="Select Report Folder",
            initialdir=settings.get('report_folder') or os.getcwd()
        )
        if not folder:
            return

        try:
            path = write_rental_report(self.desk.ledger, folder)
        except (OSError, ValueError) as e:
            logger.exception("Report export failed")
            messagebox.showerror("Error", f"Could not write report: {e}")
            return
        except Exception as e:
            logger.exception("Unexpected error during report export")
            messagebox.showerror("Error", f"Unexpected error while writing report: {e}")
            return

        settings['report_folder'] = folder
        save_config(self.config_data)

        if messagebox.askyesno("Report Ready", f"Report saved to:\n{path}\n\nOpen it now?"):
            open_file(path)


def open_file(path):
    """Open a file with the platform's default application."""
    try:
        if sys.platform.startswith('win'):
            os.startfile(path)
        elif sys.platform == 'darwin':
            subprocess.call(['open', path])
        else:
            subprocess.call(['xdg-open', path])
    except OSError as e:
        logger.warning(f"Could not open {path}: {e}")
