import os

# Absolute BASE folder where the entire project lives
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Master folders
DATA_DIR = os.path.join(BASE_DIR, "data")
RESULTS_FOLDER = os.path.join(BASE_DIR, "results")
LOGS_FOLDER = os.path.join(BASE_DIR, "logs")

# Ensure folders exist
for folder in (DATA_DIR, RESULTS_FOLDER, LOGS_FOLDER):
    os.makedirs(folder, exist_ok=True)

# Specific important files
DB_FILENAME = "new-scorecard.db"
CONFIG_PATH = os.path.join(BASE_DIR, "maintenance_config.json")
KNOWN_PLAYERS_PATH = os.path.join(BASE_DIR, "known_players.json")
SITEMAP_PATH = os.path.join(BASE_DIR, "frontend", "public", "sitemap.xml")
ROUTES_INDEX_PATH = os.path.join(BASE_DIR, "index.js")


def get_db_path(filename: str = DB_FILENAME) -> str:
    """Resolve the pricing database location.

    Order: SCORECARD_DB_PATH, then the Railway volume mount, then data/.
    """
    explicit = os.getenv("SCORECARD_DB_PATH", "").strip()
    if explicit:
        return explicit
    volume = os.getenv("RAILWAY_VOLUME_MOUNT_PATH", "").strip()
    if volume:
        return os.path.join(volume, filename)
    return os.path.join(DATA_DIR, filename)
