from pathlib import Path
import os
from dotenv import load_dotenv

# --- Paths ---
BASE_DIR = Path(__file__).resolve().parent.parent

# --- Cargar .env antes de leer variables ---
load_dotenv()

# --- Core / env ---
def _is_true(v: str) -> bool:
    return str(v).lower() in {"1", "true", "yes", "on"}


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


DEBUG = _is_true(os.getenv("DEBUG", "0"))
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")

_default_hosts = "localhost,127.0.0.1,testserver"
ALLOWED_HOSTS = [h.strip() for h in os.getenv("ALLOWED_HOSTS", _default_hosts).split(",") if h.strip()]

# --- Seguridad/Proxy ---
SECURE_PROXY_SSL_HEADER = ('HTTP_X_FORWARDED_PROTO', 'https')  # detrás de nginx

# --- Juego ---
# Catálogo JSON (lista de películas) y lista curada opcional de ids
FILMLE_CATALOG_PATH = os.getenv("FILMLE_CATALOG_PATH", str(BASE_DIR / "movies.json"))
FILMLE_CURATED_PATH = os.getenv("FILMLE_CURATED_PATH") or None
# Fuerza la película del día (pruebas/curación manual)
FILMLE_OVERRIDE_ID = os.getenv("FILMLE_OVERRIDE_ID") or None
# Cambiar offset o salt rebaraja TODAS las películas del día ya publicadas
FILMLE_DAY_OFFSET_HOURS = _int_env("FILMLE_DAY_OFFSET_HOURS", -3)
FILMLE_DAY_SALT = os.getenv("FILMLE_DAY_SALT", "v1")

OMDB_API_KEY = os.getenv("OMDB_API_KEY", "")

# --- Apps ---
INSTALLED_APPS = [
    "filmgame.apps.FilmgameConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "filmle.urls"

TEMPLATES = []

WSGI_APPLICATION = "filmle.wsgi.application"

# --- DB ---
# El juego no persiste nada: catálogo en memoria, sin sesiones ni usuarios
DATABASES = {}

# --- i18n / tiempo ---
LANGUAGE_CODE = "es"
USE_I18N = True
USE_TZ = True
TIME_ZONE = "UTC"

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "filmgame": {"handlers": ["console"], "level": LOG_LEVEL, "propagate": False},
        "django": {"handlers": ["console"], "level": "WARNING"},
    },
}
