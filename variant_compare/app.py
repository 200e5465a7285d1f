import customtkinter as ctk

from variant_compare.config import CompareSettings
from variant_compare.controllers.app_controller import AppController
from variant_compare.controllers.session import ComparisonSession
from variant_compare.models.image_model import SlotName
from variant_compare.ui.comparison_view import ComparisonView
from variant_compare.ui.nav_bar import NavBar
from variant_compare.ui.summary_view import SummaryView
from variant_compare.ui.upload_panel import UploadPanel


class VariantCompareApp(ctk.CTk):
    def __init__(self, settings: CompareSettings | None = None) -> None:
        super().__init__()
        ctk.set_appearance_mode("system")
        ctk.set_default_color_theme("blue")

        self.title("Сравнение вариантов дизайна")
        self.minsize(900, 640)

        # root layout: content on top, navigation at the bottom
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)
        self.grid_rowconfigure(1, weight=0)

        self._upload_screen = ctk.CTkFrame(self, fg_color="transparent")
        self._upload_screen.grid(row=0, column=0, sticky="nsew", padx=12, pady=(12, 6))
        self._upload_screen.grid_columnconfigure((0, 1), weight=1)
        self._panels = {}
        for column, slot in enumerate(SlotName):
            panel = UploadPanel(self._upload_screen, slot)
            panel.grid(row=0, column=column, sticky="nsew", padx=6, pady=6)
            self._panels[slot] = panel
        self._compare_btn = ctk.CTkButton(self._upload_screen, text="Сравнить варианты")
        self._compare_btn.grid(row=1, column=0, columnspan=2, pady=(6, 12))

        self._comparison = ComparisonView(self)
        self._comparison.grid(row=0, column=0, sticky="nsew", padx=12, pady=(12, 6))
        self._summary = SummaryView(self)
        self._summary.grid(row=0, column=0, sticky="nsew", padx=12, pady=(12, 6))

        self._nav = NavBar(self)
        self._nav.grid(row=1, column=0, sticky="ew", padx=12, pady=(0, 12))

        self._controller = AppController(
            window=self,
            upload_screen=self._upload_screen,
            panels=self._panels,
            compare_button=self._compare_btn,
            comparison_view=self._comparison,
            summary_view=self._summary,
            nav_bar=self._nav,
            session=ComparisonSession(settings),
        )
        self._controller.bind_events()
