APP_TITLE = "PPM Viewer (P3/P6)"
APP_SIZE = "1024x768"

# domyślna jakość eksportu JPEG, skala 0.0..1.0
DEFAULT_JPEG_QUALITY = 0.9

PPM_FILETYPES = [("PPM", "*.ppm *.pnm"), ("Wszystkie pliki", "*")]
JPEG_FILETYPES = [("JPEG", "*.jpg *.jpeg")]

MAX_COLOR_VALUE = 65535

# tło płótna (widoczne tam, gdzie obraz nie ma pikseli)
COL_BG = "#d0d0d0"

# limit pikseli przy budowaniu bufora do wyświetlenia/eksportu (jak MAX_IMAGE_PIXELS w Pillow)
MAX_IMAGE_PIXELS = 89_478_485
