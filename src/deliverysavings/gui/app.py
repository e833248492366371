"""Tkinter GUI application for DeliverySavings."""
from __future__ import annotations

import logging
import tkinter as tk
from tkinter import filedialog, messagebox, scrolledtext, simpledialog, ttk
from typing import Dict, Optional

from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg, NavigationToolbar2Tk
from matplotlib.figure import Figure

from ..calculations import (
    ANNUAL,
    MONTHLY,
    CalculationResults,
    CalculatorInputs,
    calculate_savings,
    format_currency,
)
from ..charts import build_savings_figure
from ..computation import build_impact_cards, savings_summary, should_offer_plan
from ..leads import LeadValidationError, RestaurantInfo, build_lead
from ..parsing import (
    DEFAULT_INPUTS,
    SUGGESTED_MONTHLY_GPV,
    SUGGESTED_VALUES,
    parse_input_value,
    validate_input,
)
from ..reporting import export_projections_csv, format_breakdown
from ..storage import (
    LEAD_KEY,
    SessionStore,
    load_inputs,
    load_timeframe_preference,
    save_inputs,
    save_results,
    save_timeframe_preference,
)

logger = logging.getLogger(__name__)

SLIDERS = (
    ("commission_percent", "Current 3rd party commission rate", 40),
    ("delivery_mix", "What % of your online orders are delivery?", 100),
    ("migration_percent", "Migration to Innowi", 100),
)


class App(tk.Tk):
    def __init__(self, store: Optional[SessionStore] = None) -> None:
        super().__init__()
        self.title("Delivery Savings Calculator")
        self.geometry("1100x900")
        self.store = store if store is not None else SessionStore()

        saved = load_inputs(self.store, DEFAULT_INPUTS)
        self.inputs: CalculatorInputs = saved.replace(
            timeframe=load_timeframe_preference(self.store)
        )
        self.results: CalculationResults = calculate_savings(self.inputs)

        self._timeframe_var = tk.StringVar(value=self.inputs.timeframe)
        self._slider_vars: Dict[str, tk.IntVar] = {}
        self._slider_labels: Dict[str, ttk.Label] = {}
        self._error_labels: Dict[str, ttk.Label] = {}
        self._card_labels: Dict[str, ttk.Label] = {}
        self._ready = False

        self._build_info()
        self._build_inputs()
        self._build_cards()
        self._build_chart()
        self._build_buttons()
        self._build_text()
        self._ready = True
        self._recalculate()

    # ---------- UI ----------
    def _build_info(self) -> None:
        frm = ttk.LabelFrame(self, text="Your Restaurant")
        frm.pack(side=tk.TOP, fill=tk.X, padx=8, pady=6)
        ttk.Label(frm, text="Restaurant name:").grid(row=0, column=0, sticky="w")
        self.ent_name = ttk.Entry(frm, width=30)
        self.ent_name.grid(row=0, column=1, padx=6, pady=4, sticky="w")
        ttk.Label(frm, text="City:").grid(row=0, column=2, sticky="w")
        self.ent_city = ttk.Entry(frm, width=24)
        self.ent_city.grid(row=0, column=3, padx=6, pady=4, sticky="w")

    def _build_inputs(self) -> None:
        frm = ttk.LabelFrame(self, text="Adjust Your Restaurant's Details")
        frm.pack(side=tk.TOP, fill=tk.X, padx=8, pady=6)
        frm.grid_columnconfigure(1, weight=1)

        ttk.Label(frm, text="Total online sales (pickup & delivery) $:").grid(
            row=0, column=0, sticky="w"
        )
        self.ent_gpv = ttk.Entry(frm, width=18)
        if self.inputs.total_gpv is not None:
            self.ent_gpv.insert(0, f"{self.inputs.total_gpv:,.0f}")
        self.ent_gpv.grid(row=0, column=1, padx=6, pady=4, sticky="w")
        self.ent_gpv.bind("<KeyRelease>", self._on_gpv_changed)

        toggle = ttk.Frame(frm)
        toggle.grid(row=0, column=2, sticky="e")
        ttk.Label(toggle, text="Timeframe:").pack(side=tk.LEFT)
        for value, text in ((MONTHLY, "Monthly"), (ANNUAL, "Annual")):
            ttk.Radiobutton(
                toggle,
                text=text,
                value=value,
                variable=self._timeframe_var,
                command=self._on_timeframe_changed,
            ).pack(side=tk.LEFT, padx=4)
        self._gpv_hint = ttk.Label(frm, text=self._gpv_placeholder())
        self._gpv_hint.grid(row=1, column=1, sticky="w", padx=6)
        self._error_labels["total_gpv"] = ttk.Label(frm, foreground="#B91C1C")
        self._error_labels["total_gpv"].grid(row=1, column=2, sticky="e")

        for idx, (field, label, maximum) in enumerate(SLIDERS, start=2):
            current = getattr(self.inputs, field)
            var = tk.IntVar(value=int(current if current is not None else SUGGESTED_VALUES[field]))
            self._slider_vars[field] = var
            text_label = ttk.Label(frm)
            text_label.grid(row=idx * 2, column=0, sticky="w")
            self._slider_labels[field] = text_label
            scale = ttk.Scale(
                frm,
                from_=0,
                to=maximum,
                orient=tk.HORIZONTAL,
                command=lambda value, f=field: self._on_slider_changed(f, value),
            )
            scale.configure(value=var.get())
            scale.grid(row=idx * 2, column=1, columnspan=2, padx=6, pady=2, sticky="we")
            error = ttk.Label(frm, foreground="#B91C1C")
            error.grid(row=idx * 2 + 1, column=1, sticky="w", padx=6)
            self._error_labels[field] = error
            self._update_slider_label(field)

    def _build_cards(self) -> None:
        frm = ttk.LabelFrame(self, text="Financial Impact Summary")
        frm.pack(side=tk.TOP, fill=tk.X, padx=8, pady=6)
        for col, card in enumerate(build_impact_cards(self.results, self.inputs.timeframe)):
            frm.grid_columnconfigure(col, weight=1)
            cell = ttk.Frame(frm)
            cell.grid(row=0, column=col, padx=8, pady=4, sticky="we")
            ttk.Label(cell, text=f"{card.title} {card.subtitle}".strip()).pack(anchor="w")
            value = ttk.Label(cell, font=("TkDefaultFont", 16, "bold"))
            value.pack(anchor="w")
            description = ttk.Label(cell)
            description.pack(anchor="w")
            self._card_labels[card.card_id] = value
            self._card_labels[f"{card.card_id}:description"] = description

    def _build_chart(self) -> None:
        frm = ttk.Frame(self)
        frm.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=8, pady=6)
        self.fig = Figure(figsize=(9.8, 3.6), dpi=100)
        self.canvas = FigureCanvasTkAgg(self.fig, master=frm)
        self.canvas.get_tk_widget().pack(side=tk.TOP, fill=tk.BOTH, expand=True)
        self.toolbar = NavigationToolbar2Tk(self.canvas, frm)
        self.toolbar.update()

    def _build_buttons(self) -> None:
        frm = ttk.Frame(self)
        frm.pack(side=tk.TOP, fill=tk.X, padx=8, pady=6)
        ttk.Button(frm, text="Export CSV", command=self._export_csv).pack(side=tk.LEFT, padx=4)
        ttk.Button(frm, text="Get Marketing Plan", command=self._request_plan).pack(
            side=tk.LEFT, padx=4
        )

    def _build_text(self) -> None:
        frm = ttk.LabelFrame(self, text="Breakdown")
        frm.pack(side=tk.TOP, fill=tk.BOTH, expand=True, padx=8, pady=6)
        self.txt = scrolledtext.ScrolledText(frm, wrap="word", height=10)
        self.txt.pack(fill=tk.BOTH, expand=True)

    # ---------- input handling ----------
    def _gpv_placeholder(self) -> str:
        if self._timeframe_var.get() == MONTHLY:
            return f"e.g., {SUGGESTED_MONTHLY_GPV:,}/month"
        return f"e.g., {SUGGESTED_VALUES['total_gpv']:,}/year"

    def _update_slider_label(self, field: str) -> None:
        label = dict((f, text) for f, text, _ in SLIDERS)[field]
        self._slider_labels[field].configure(text=f"{label}: {self._slider_vars[field].get()}%")

    def _set_input(self, field: str, value) -> None:
        self.inputs = self.inputs.replace(**{field: value})
        if field in self._error_labels:
            self._error_labels[field].configure(text=validate_input(field, value) or "")
        self._recalculate()

    def _on_gpv_changed(self, _event: Optional[object] = None) -> None:
        self._set_input("total_gpv", parse_input_value(self.ent_gpv.get()))

    def _on_slider_changed(self, field: str, value: str) -> None:
        if not self._ready:
            return
        whole = int(round(float(value)))
        if whole == self._slider_vars[field].get() and getattr(self.inputs, field) == whole:
            return
        self._slider_vars[field].set(whole)
        self._update_slider_label(field)
        self._set_input(field, whole)

    def _on_timeframe_changed(self) -> None:
        timeframe = self._timeframe_var.get()
        save_timeframe_preference(self.store, timeframe)
        self._gpv_hint.configure(text=self._gpv_placeholder())
        self._set_input("timeframe", timeframe)

    # ---------- rendering ----------
    def _recalculate(self) -> None:
        self.results = calculate_savings(self.inputs)
        save_inputs(self.store, self.inputs)
        for card in build_impact_cards(self.results, self.inputs.timeframe):
            self._card_labels[card.card_id].configure(text=card.value)
            self._card_labels[f"{card.card_id}:description"].configure(text=card.description)
        build_savings_figure(
            self.results,
            self.inputs.timeframe,
            self.ent_name.get().strip() or None,
            figure=self.fig,
        )
        self.canvas.draw_idle()
        self.txt.configure(state="normal")
        self.txt.delete("1.0", "end")
        self.txt.insert("end", format_breakdown(self.inputs, self.results))
        self.txt.configure(state="disabled")

    # ---------- actions ----------
    def _export_csv(self) -> None:
        path = filedialog.asksaveasfilename(
            title="Export CSV",
            defaultextension=".csv",
            filetypes=[("CSV files", "*.csv")],
        )
        if not path:
            return
        try:
            export_projections_csv(path, self.results, cumulative=True)
        except OSError as exc:
            messagebox.showerror("Error", str(exc))
            return
        messagebox.showinfo("Export", f"CSV exported to {path}")

    def _request_plan(self) -> None:
        if not should_offer_plan(self.inputs, self.results):
            messagebox.showinfo(
                "Marketing Plan", "Enter your sales figures to see a positive saving first."
            )
            return
        email = simpledialog.askstring("Marketing Plan", "Email address:", parent=self)
        if email is None:
            return
        info = RestaurantInfo(name=self.ent_name.get(), city=self.ent_city.get())
        try:
            lead = build_lead(info, email, self.results)
        except LeadValidationError as exc:
            messagebox.showerror("Marketing Plan", "\n".join(exc.errors.values()))
            return
        self.store.save(LEAD_KEY, lead.to_dict())
        save_results(self.store, self.results)
        summary = savings_summary(self.results)
        logger.info("Plan requested by %s", lead.email)
        messagebox.showinfo(
            "Marketing Plan",
            (
                f"Thanks, {lead.restaurant_name}! Your plan is on its way to {lead.email}.\n\n"
                f"12-month projected savings: {format_currency(summary.total_savings)}"
            ),
        )


def run(store_path: Optional[str] = None) -> None:
    App(SessionStore(store_path)).mainloop()


__all__ = ["run", "App"]
