"""
Conversion nom de site <-> slug d'URL.

Le slug n'est pas stocké: la résolution reconstruit des noms candidats à partir du slug, ce qui
est une opération heuristique et avec perte (deux noms distincts peuvent produire le même slug).
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Minuscule et mots joints par des tirets (`"Blue Hole"` -> `"blue-hole"`)."""
    return _NON_ALNUM.sub("-", name.lower()).strip("-")


def _capitalize(token: str) -> str:
    # Seule la première lettre change, le reste du mot est conservé tel quel.
    return token[:1].upper() + token[1:]


@dataclass(frozen=True)
class SlugCandidates:
    """Noms candidats reconstruits depuis un slug.

    - spaced: mots capitalisés joints par un espace (`"Blue Hole"`)
    - dashed: mots capitalisés joints par `" - "` (`"Great Barrier Reef - Flynn Reef"` pour des
      noms contenant déjà un tiret entouré d'espaces)
    - first_word: premier mot de `spaced`, utilisé en repli par inclusion
    """

    spaced: str
    dashed: str
    first_word: str


def slug_candidates(slug: str) -> SlugCandidates:
    """Construit les candidats de résolution d'un slug."""
    tokens = [_capitalize(t) for t in slug.split("-")]
    spaced = " ".join(tokens)
    return SlugCandidates(
        spaced=spaced,
        dashed=" - ".join(tokens),
        first_word=spaced.split(" ")[0],
    )
