# filmgame/services/omdb.py
from __future__ import annotations

import requests
from django.conf import settings

BASE_URL = "https://www.omdbapi.com/"

class OMDbError(RuntimeError):
    """Error de cliente OMDb."""

class OMDbClient:
    """
    Cliente mínimo para OMDb.
    Usa la API key configurada en settings.OMDB_API_KEY (o .env).
    """
    def __init__(self, api_key: str | None = None, timeout: int = 10, session=None):
        self.api_key = api_key or getattr(settings, "OMDB_API_KEY", "")
        if not self.api_key:
            raise OMDbError("Falta OMDB_API_KEY en settings/.env")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get(self, params: dict) -> dict:
        params = {"apikey": self.api_key, **params}
        try:
            r = self.session.get(BASE_URL, params=params, timeout=self.timeout)
            r.raise_for_status()
            data = r.json()
        except (requests.RequestException, ValueError) as e:
            raise OMDbError(f"OMDb no respondió correctamente: {e}") from e
        if data.get("Response") == "False":
            # OMDb devuelve "Response: False" y un "Error"
            raise OMDbError(data.get("Error", "OMDb devolvió Response=False"))
        return data

    def buscar_por_titulo(self, titulo: str, year: int | None = None) -> dict:
        """
        Busca una película exacta por título (y opcionalmente año).
        """
        params = {"t": titulo.strip(), "type": "movie"}
        if year:
            params["y"] = str(year)
        return self._get(params)

    def buscar_por_imdb_id(self, imdb_id: str) -> dict:
        """Trae una película por IMDb ID (p.ej. 'tt1375666')."""
        return self._get({"i": imdb_id.strip()})

# -----------------------
# Helpers de parseo
# -----------------------

def _safe(x: str | None) -> str:
    return "" if (x is None or x == "N/A") else str(x).strip()

def _int_year(value: str | None) -> int | None:
    """
    OMDb a veces envía '2010–' o rangos; nos quedamos con el primer número.
    """
    value = _safe(value)
    if not value:
        return None
    first = value.split("–")[0].split("-")[0].strip()
    return int(first) if first.isdigit() else None

def _split_csv(value: str | None) -> list[str]:
    """'Action, Drama' -> ['Action', 'Drama']; 'N/A' -> []."""
    return [p.strip() for p in _safe(value).split(",") if p.strip()]

# -----------------------
# Mapeo a una entrada del catálogo
# -----------------------

def mapear_a_entrada_catalogo(omdb_json: dict) -> dict:
    """
    Convierte JSON de OMDb a una entrada cruda del catálogo (movies.json).
    OMDb no trae locaciones de filmación ni título localizado.
    """
    return {
        "id": _safe(omdb_json.get("imdbID")),
        "title": _safe(omdb_json.get("Title")),
        "title_pt": None,
        "release_year": _int_year(omdb_json.get("Year")),
        "stars": _split_csv(omdb_json.get("Actors")),
        "directors": _split_csv(omdb_json.get("Director")),
        "writers": _split_csv(omdb_json.get("Writer")),
        "production_companies": _split_csv(omdb_json.get("Production")),
        "countries_origin": _split_csv(omdb_json.get("Country")),
        "filming_locations": [],
        "genres": _split_csv(omdb_json.get("Genre")),
        "languages": _split_csv(omdb_json.get("Language")),
    }
