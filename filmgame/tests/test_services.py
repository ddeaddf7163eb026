import json
import tempfile
from pathlib import Path
from unittest.mock import Mock

import requests
from django.test import SimpleTestCase, override_settings

from filmgame.services.catalog import Catalog
from filmgame.services.curation import construir_lista_curada
from filmgame.services.game_service import GameContext, PeliculaDesconocidaError, build_context_from_settings
from filmgame.services.omdb import OMDbClient, OMDbError, mapear_a_entrada_catalogo
from filmgame.services.reports import COLUMNAS, FORMATOS, get_formato
from .factories import make_catalog, make_movie

OMDB_MATRIX = {
    "Title": "The Matrix",
    "Year": "1999",
    "Genre": "Action, Sci-Fi",
    "Director": "Lana Wachowski, Lilly Wachowski",
    "Writer": "Lilly Wachowski, Lana Wachowski",
    "Actors": "Keanu Reeves, Laurence Fishburne, Carrie-Anne Moss",
    "Language": "English",
    "Country": "United States, Australia",
    "Production": "N/A",
    "imdbID": "tt0133093",
    "Response": "True",
}


class OMDbTest(SimpleTestCase):
    def test_mapeo_a_entrada(self):
        entrada = mapear_a_entrada_catalogo(OMDB_MATRIX)
        self.assertEqual(entrada["id"], "tt0133093")
        self.assertEqual(entrada["release_year"], 1999)
        self.assertEqual(entrada["genres"], ["Action", "Sci-Fi"])
        self.assertEqual(entrada["directors"], ["Lana Wachowski", "Lilly Wachowski"])
        self.assertEqual(entrada["production_companies"], [])
        self.assertEqual(entrada["filming_locations"], [])

    def test_anio_con_rango(self):
        self.assertEqual(mapear_a_entrada_catalogo({"Year": "2010–2012"})["release_year"], 2010)
        self.assertIsNone(mapear_a_entrada_catalogo({"Year": "N/A"})["release_year"])

    @override_settings(OMDB_API_KEY="")
    def test_sin_api_key(self):
        with self.assertRaises(OMDbError):
            OMDbClient()

    def test_response_false(self):
        session = Mock()
        session.get.return_value.json.return_value = {"Response": "False", "Error": "Movie not found!"}
        client = OMDbClient(api_key="k", session=session)
        with self.assertRaisesMessage(OMDbError, "Movie not found!"):
            client.buscar_por_titulo("Nope")

    def test_error_de_red(self):
        session = Mock()
        session.get.side_effect = requests.ConnectionError("down")
        client = OMDbClient(api_key="k", session=session)
        with self.assertRaises(OMDbError):
            client.buscar_por_imdb_id("tt1")

    def test_parametros(self):
        session = Mock()
        session.get.return_value.json.return_value = OMDB_MATRIX
        client = OMDbClient(api_key="k", session=session)
        client.buscar_por_titulo(" The Matrix ", 1999)
        params = session.get.call_args.kwargs["params"]
        self.assertEqual(params, {"apikey": "k", "t": "The Matrix", "type": "movie", "y": "1999"})


class ReportsTest(SimpleTestCase):
    def setUp(self):
        self.catalog = Catalog([
            make_movie("1", "Cidade de Deus", release_year=2002, genres=["Crime", "Drama"]),
            make_movie("2", "Sin año"),
        ])

    def test_csv(self):
        data = get_formato("csv").generar(self.catalog)
        texto = data.decode("utf-8")
        self.assertTrue(texto.startswith("\ufeff"))
        lines = texto.lstrip("\ufeff").splitlines()
        self.assertEqual(lines[0], ",".join(COLUMNAS))
        self.assertEqual(lines[1], "1,Cidade de Deus,,2002" + "," * 7 + "Crime; Drama,")
        self.assertEqual(lines[2], "2,Sin año" + "," * 10)

    def test_pdf(self):
        formato = get_formato("PDF")
        self.assertEqual(formato.extension, "pdf")
        self.assertTrue(formato.generar(self.catalog).startswith(b"%PDF"))

    def test_formato_desconocido_cae_a_csv(self):
        self.assertEqual(get_formato("xlsx").extension, "csv")
        self.assertEqual(get_formato(None).extension, "csv")
        self.assertEqual(sorted(FORMATOS), ["csv", "pdf"])


class CurationTest(SimpleTestCase):
    def test_equilibrio_por_decadas(self):
        movies = [make_movie(f"a{i}", release_year=1980 + i % 10, genres=["Drama"]) for i in range(10)]
        movies += [make_movie(f"b{i}", release_year=2000 + i % 10, genres=["Action"]) for i in range(10)]
        ids = construir_lista_curada(Catalog(movies), 4)
        self.assertEqual(len(ids), 4)
        self.assertEqual(sum(1 for i in ids if i.startswith("a")), 2)
        self.assertEqual(sum(1 for i in ids if i.startswith("b")), 2)

    def test_tope_por_genero(self):
        movies = [make_movie(f"d{i}", release_year=1990, genres=["Drama"]) for i in range(6)]
        movies += [make_movie(f"c{i}", release_year=1991, genres=["Comedy"]) for i in range(4)]
        ids = construir_lista_curada(Catalog(movies), 4, genre_cap=0.5)
        # cupo 4, tope 2 por género primario
        self.assertEqual(ids, ["d0", "d1", "c0", "c1"])

    def test_rellena_con_peliculas_sin_anio(self):
        catalog = Catalog([make_movie("x"), make_movie("y", release_year=2001)])
        self.assertEqual(construir_lista_curada(catalog, 5), ["y", "x"])

    def test_vacio(self):
        self.assertEqual(construir_lista_curada(Catalog(), 10), [])
        self.assertEqual(construir_lista_curada(make_catalog(3), 0), [])


class GameContextTest(SimpleTestCase):
    def test_evaluar_intento_desconocido(self):
        game = GameContext(catalog=make_catalog(3))
        with self.assertRaises(PeliculaDesconocidaError):
            game.evaluar_intento("nope", "2024-01-15")

    def test_token_no_contiene_el_id(self):
        game = GameContext(catalog=Catalog([make_movie("tt0133093")]))
        token = game.token_del_dia("2024-01-15")
        self.assertEqual(len(token), 16)
        self.assertNotIn("tt0133093", token)

    def test_build_desde_settings(self):
        with tempfile.TemporaryDirectory() as tmp:
            movies = Path(tmp) / "movies.json"
            movies.write_text(json.dumps([{"id": 1, "title": "A"}, {"id": 2, "title": "B"}]), encoding="utf-8")
            curated = Path(tmp) / "curated.json"
            curated.write_text(json.dumps([2]), encoding="utf-8")
            with override_settings(
                FILMLE_CATALOG_PATH=str(movies),
                FILMLE_CURATED_PATH=str(curated),
                FILMLE_OVERRIDE_ID="  ",
                FILMLE_DAY_OFFSET_HOURS=0,
                FILMLE_DAY_SALT="v9",
            ):
                game = build_context_from_settings()
        self.assertEqual(len(game.catalog), 2)
        self.assertEqual(game.curated_ids, ("2",))
        self.assertIsNone(game.override_id)
        self.assertEqual((game.offset_horas, game.salt), (0, "v9"))
        self.assertEqual(game.pelicula_del_dia("2024-01-15").id, "2")

    def test_build_con_catalogo_inexistente(self):
        with override_settings(FILMLE_CATALOG_PATH="/no/existe/movies.json", FILMLE_CURATED_PATH=None):
            with self.assertLogs("filmgame.services.game_service", level="ERROR"):
                game = build_context_from_settings()
        self.assertEqual(len(game.catalog), 0)
