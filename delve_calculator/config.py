"""Drop-rate tables and tracker constants.

Rates are the published per-floor unique rates for the Doom of Mokhaiotl
delve. Floor 9 holds the rates for every wave past floor 8. Floors 1 and
below have no table: nothing can drop there.
"""
from .models import DropRates, UniqueItem

# Item ids (game item database)
MOKHAIOTL_CLOTH: int = 31109
EYE_OF_AYAK_UNCHARGED: int = 31115
AVERNIC_TREADS: int = 31088
DOM: int = 31130

# Display order matches the reward config order
UNIQUE_ITEMS: tuple[UniqueItem, ...] = (
    UniqueItem(MOKHAIOTL_CLOTH, "Mokhaiotl cloth", "Mokhaiotl Cloth", "mokhaiotl_cloth"),
    UniqueItem(EYE_OF_AYAK_UNCHARGED, "Eye of ayak (uncharged)", "Eye of Ayak", "eye_of_ayak"),
    UniqueItem(AVERNIC_TREADS, "Avernic treads", "Avernic Treads", "avernic_treads"),
    UniqueItem(DOM, "Dom", "Dom", "dom"),
)

# Dom is a pet: announced by chat message, never listed as claimable loot
PET_ITEM_IDS: frozenset[int] = frozenset({DOM})

# Format: {floor: DropRates(overall, cloth, eye, treads, dom)}
DROP_RATES_BY_FLOOR: dict[int, DropRates] = {
    2: DropRates(1.0 / 2500, 1.0 / 2500, 0.0, 0.0, 0.0),
    3: DropRates(1.0 / 1000, 1.0 / 2000, 1.0 / 2000, 0.0, 0.0),
    4: DropRates(1.0 / 450, 1.0 / 1350, 1.0 / 1350, 1.0 / 1350, 0.0),
    5: DropRates(1.0 / 270, 1.0 / 810, 1.0 / 810, 1.0 / 810, 0.0),
    6: DropRates(1.0 / 255, 1.0 / 765, 1.0 / 765, 1.0 / 765, 1.0 / 1000),
    7: DropRates(1.0 / 240, 1.0 / 720, 1.0 / 720, 1.0 / 720, 1.0 / 750),
    8: DropRates(1.0 / 210, 1.0 / 630, 1.0 / 630, 1.0 / 630, 1.0 / 500),
    9: DropRates(1.0 / 180, 1.0 / 540, 1.0 / 540, 1.0 / 540, 1.0 / 250),  # 8+
}

# Profile keys and names
DEFAULT_GAME_MODE: str = "STANDARD"
MANUAL_KEY_SUFFIX: str = ":MANUAL"
ALL_PROFILE_NAME: str = "All"
MANUAL_PROFILE_NAME: str = "Manual"
SESSION_PROFILE_NAME: str = "Session"

# On-disk locations
DATA_DIR_ENV: str = "DELVE_CALCULATOR_HOME"
LOG_LEVEL_ENV: str = "DELVE_CALCULATOR_LOG_LEVEL"
DATA_FOLDER_NAME: str = "delve-calculator"
PROFILES_FILE_NAME: str = "profiles.json"
SETTINGS_FILE_NAME: str = "settings.json"
LEGACY_PROPERTIES_FILE_NAME: str = "delve-calculator.properties"
LOG_FILE_NAME: str = "delve-calculator.log"
