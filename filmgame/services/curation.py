from __future__ import annotations

from collections import Counter, defaultdict

from ..models import Movie
from .catalog import Catalog

PRIMARY_GENRE_CAP_FRACTION = 0.28  # máx. ~28% del cupo de una década por el mismo "primer" género


def _decade(year: int) -> int:
    return (year // 10) * 10


def _primary_genre(m: Movie) -> str:
    return m.genres[0] if m.genres else "Unknown"


def _cuotas(buckets: dict[int, list[Movie]], top_n: int) -> dict[int, int]:
    # Reparto proporcional a la cantidad de películas por década
    total = sum(len(v) for v in buckets.values())
    targets = {d: min(round(len(v) / total * top_n), len(v)) for d, v in buckets.items()}

    # Si faltan cupos, redistribuye a las décadas con más stock
    short = top_n - sum(targets.values())
    stock = sorted(((d, len(buckets[d]) - targets[d]) for d in buckets), key=lambda x: x[1], reverse=True)
    i = 0
    while short > 0 and any(s > 0 for _, s in stock):
        d, s = stock[i % len(stock)]
        if s > 0:
            targets[d] += 1
            stock[i % len(stock)] = (d, s - 1)
            short -= 1
        i += 1
    return targets


def construir_lista_curada(
    catalog: Catalog, top_n: int, genre_cap: float = PRIMARY_GENRE_CAP_FRACTION
) -> list[str]:
    """
    Lista curada de ids equilibrada por décadas, con tope por género
    primario dentro de cada década. Orden del catálogo dentro de cada década.
    """
    if top_n <= 0 or len(catalog) == 0:
        return []

    buckets: dict[int, list[Movie]] = defaultdict(list)
    for m in catalog:
        if m.release_year is not None:
            buckets[_decade(m.release_year)].append(m)

    chosen: list[Movie] = []
    if buckets:
        targets = _cuotas(buckets, top_n)
        for d in sorted(buckets):
            cap = max(1, int(targets[d] * genre_cap))
            taken: list[Movie] = []
            per_genre: Counter = Counter()
            for m in buckets[d]:
                if len(taken) >= targets[d]:
                    break
                g = _primary_genre(m)
                if per_genre[g] >= cap:
                    continue
                taken.append(m)
                per_genre[g] += 1

            # Si no se alcanzó el cupo (por el tope), rellena ignorándolo
            for m in buckets[d]:
                if len(taken) >= targets[d]:
                    break
                if m not in taken:
                    taken.append(m)
            chosen.extend(taken)

    # Si aún sobra cupo, rellena con cualquier película (incluidas sin año)
    if len(chosen) < top_n:
        ids = {m.id for m in chosen}
        for m in catalog:
            if m.id in ids:
                continue
            chosen.append(m)
            ids.add(m.id)
            if len(chosen) >= top_n:
                break

    return [m.id for m in chosen[:top_n]]
