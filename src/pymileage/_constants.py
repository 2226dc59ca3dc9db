"""Internal constants shared across the library."""

STORAGE_KEY = "itfvAppState"
SAVE_DELAY_SECONDS: float = 0.5

# Label given to the single option synthesized from a legacy ``distance`` field.
STANDARD_ROUTE_LABEL = "Standard Route"

MAPS_DIRECTIONS_URL = "https://www.google.it/maps/dir"

ITALIAN_MONTHS: tuple[str, ...] = (
    "gennaio",
    "febbraio",
    "marzo",
    "aprile",
    "maggio",
    "giugno",
    "luglio",
    "agosto",
    "settembre",
    "ottobre",
    "novembre",
    "dicembre",
)
