import logging
import tkinter as tk
from tkinter import ttk, messagebox
from tkinter.filedialog import askopenfilename, asksaveasfilename

from .constants import (
    APP_TITLE,
    APP_SIZE,
    COL_BG,
    DEFAULT_JPEG_QUALITY,
    JPEG_FILETYPES,
    PPM_FILETYPES,
)
from .io.jpeg_io import write_jpeg
from .render import PhotoSurface
from .session import LoadSession

log = logging.getLogger(__name__)


class App(tk.Tk):
    def __init__(self, strict: bool = False):
        super().__init__()
        self.title(APP_TITLE)
        self.geometry(APP_SIZE)
        self.minsize(480, 360)

        # stan prezentacji trzyma sesja, dekoder nic o nim nie wie
        self.session = LoadSession(strict=strict)
        self.strict_var = tk.BooleanVar(value=strict)

        self._build_ui()
        self._bind_canvas()

        self.surface = PhotoSurface(self.canvas)

    def _build_ui(self):
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        # ===== PASEK NARZĘDZI =====
        bar = ttk.Frame(self, padding=(8, 6))
        bar.grid(row=0, column=0, columnspan=2, sticky="ew")
        ttk.Button(bar, text="Wczytaj PPM (P3/P6)", command=self.load_ppm).pack(
            side="left"
        )
        ttk.Button(bar, text="Zapisz JPEG", command=self.save_as_jpeg).pack(
            side="left", padx=4
        )
        ttk.Button(bar, text="Zoom +", command=lambda: self.change_zoom(+1)).pack(
            side="left", padx=(12, 2)
        )
        ttk.Button(bar, text="Zoom −", command=lambda: self.change_zoom(-1)).pack(
            side="left", padx=2
        )
        ttk.Checkbutton(
            bar,
            text="Tryb strict",
            variable=self.strict_var,
            command=self._on_strict_change,
        ).pack(side="left", padx=12)

        self.pixel_var = tk.StringVar(value="RGB: –")
        ttk.Label(bar, textvariable=self.pixel_var, width=24).pack(side="right")

        # ===== CANVAS =====
        self.canvas = tk.Canvas(
            self, bg=COL_BG, highlightthickness=1, highlightbackground="#ccc"
        )
        self.canvas.grid(row=1, column=0, sticky="nsew", padx=(8, 0), pady=(0, 0))
        ys = ttk.Scrollbar(self, orient="vertical", command=self.canvas.yview)
        ys.grid(row=1, column=1, sticky="ns")
        xs = ttk.Scrollbar(self, orient="horizontal", command=self.canvas.xview)
        xs.grid(row=2, column=0, sticky="ew", padx=(8, 0))
        self.canvas.configure(xscrollcommand=xs.set, yscrollcommand=ys.set)

        # --- Status bar ---
        self.status = tk.StringVar(value="Gotowe.")
        ttk.Label(self, textvariable=self.status, anchor="w", padding=(8, 4)).grid(
            row=3, column=0, columnspan=2, sticky="ew"
        )

    def _bind_canvas(self):
        self.canvas.bind("<Motion>", self._on_motion)
        self.canvas.bind("<Leave>", self._on_leave)
        self.bind_all("<Control-o>", lambda e: self.load_ppm())
        self.bind_all("<Control-s>", lambda e: self.save_as_jpeg())
        self.bind_all("<Control-plus>", lambda e: self.change_zoom(+1))
        self.bind_all("<Control-minus>", lambda e: self.change_zoom(-1))

    # --- Helpers ---
    def _set_status(self, s):
        self.status.set(s)

    def _on_strict_change(self):
        self.session.strict = bool(self.strict_var.get())

    # --- PPM ---
    def load_ppm(self, path=None):
        if path is None:
            path = askopenfilename(filetypes=PPM_FILETYPES, title="Wczytaj PPM (P3/P6)")
        if not path:
            return
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            messagebox.showerror("PPM", f"Nie udało się otworzyć pliku:\n{e}")
            return

        seq, result = self.session.decode(data)
        if not result.ok:
            # poprzedni obraz zostaje na ekranie
            if self.session.is_current(seq):
                messagebox.showerror(
                    "PPM", f"Nie udało się wczytać pliku PPM:\n{result.error}"
                )
            return
        img = result.image
        try:
            img.check_pixel_limit()
        except ValueError as e:
            messagebox.showerror("PPM", f"Nie można wyświetlić obrazu:\n{e}")
            return
        if not self.session.commit(seq, result, source=path):
            return

        log.info("Wczytano %s: %dx%d", path, img.width, img.height)
        self._set_status(f"Wczytywanie {img.width}x{img.height}…")
        self.surface.zoom = 1
        try:
            self.surface.show(img, on_done=lambda: self._on_shown(seq))
        except MemoryError:
            messagebox.showerror("PPM", "Za mało pamięci na bufor obrazu.")

    def _on_shown(self, seq):
        if not self.session.is_current(seq):
            return
        txt = self.session.state.status_text()
        if not self.session.image.complete:
            txt += " | uwaga: obcięte dane pikseli"
        self._set_status(txt)

    # --- JPEG ---
    def save_as_jpeg(self):
        img = self.session.image
        if img is None:
            messagebox.showinfo("JPEG", "Najpierw wczytaj obraz PPM.")
            return
        # wybór jakości
        top = tk.Toplevel(self)
        top.title("Zapis JPEG – jakość")
        ttk.Label(top, text="Jakość (0.0–1.0):").pack(padx=12, pady=(12, 4))
        qvar = tk.DoubleVar(value=DEFAULT_JPEG_QUALITY)
        qscale = ttk.Scale(
            top,
            from_=0.0,
            to=1.0,
            orient="horizontal",
            variable=qvar,
        )
        qscale.pack(padx=12, pady=4, fill="x")
        ttk.Label(top, textvariable=qvar).pack()
        btns = ttk.Frame(top)
        btns.pack(pady=8)

        def do_save():
            path = asksaveasfilename(
                defaultextension=".jpg",
                filetypes=JPEG_FILETYPES,
                title="Zapisz jako JPEG",
            )
            if not path:
                return
            try:
                write_jpeg(path, img, round(qvar.get(), 2))
            except (OSError, ValueError) as e:
                messagebox.showerror("JPEG", f"Nie udało się zapisać JPEG:\n{e}")
                return
            except MemoryError:
                messagebox.showerror("JPEG", "Za mało pamięci na bufor obrazu.")
                return
            messagebox.showinfo("JPEG", f"Zapisano: {path}")
            top.destroy()

        ttk.Button(btns, text="Zapisz", command=do_save).pack(side="left", padx=6)
        ttk.Button(btns, text="Anuluj", command=top.destroy).pack(side="left", padx=6)

    # --- Zoom ---
    def change_zoom(self, delta):
        # zoom całkowity: x2 dla +, /2 dla −
        if self.surface.image is None:
            self._set_status("Brak obrazu do powiększenia.")
            return
        z = self.surface.zoom * 2 if delta > 0 else self.surface.zoom // 2
        self.surface.set_zoom(min(32, max(1, z)))
        self._set_status(f"{self.session.state.status_text()} | zoom x{self.surface.zoom}")

    # --- Podgląd piksela pod kursorem ---
    def _on_motion(self, e):
        cx = self.canvas.canvasx(e.x)
        cy = self.canvas.canvasy(e.y)
        pos = self.surface.canvas_to_image(cx, cy)
        px = self.session.inspect(*pos) if pos is not None else None
        if px is None:
            self.pixel_var.set("RGB: –")
            return
        r, g, b = px
        self.pixel_var.set(f"({pos[0]},{pos[1]}) RGB: {r},{g},{b}")
        self._set_status(self.session.state.status_text())

    def _on_leave(self, e):
        self.session.state.cursor = None
        self.pixel_var.set("RGB: –")
