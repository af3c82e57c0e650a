"""Fallback prize list and wedge palette."""

from typing import List

from prizewheel.graphics.primitives import Color
from prizewheel.wheel.models import PrizeOption

# Alternating wedge fills; text colour is picked per wedge by contrast
DEFAULT_SLICE_COLORS: List[Color] = [(109, 40, 217), (255, 255, 255)]

# (id, name, weight)
DEFAULT_PRIZES = [
    ("amostra-gratis", "AMOSTRA GRÁTIS", 20),
    ("fita-metrica", "FITA MÉTRICA", 15),
    ("caneta-exclusiva", "CANETA EXCLUSIVA", 20),
    ("brinde-especial", "BRINDE ESPECIAL", 5),
    ("bloco-de-notas", "BLOCO DE NOTAS", 15),
    ("squeeze-premium", "SQUEEZE PREMIUM", 10),
    ("viseira-estilosa", "VISEIRA ESTILOSA", 10),
    ("desconto-10", "DESCONTO 10%", 5),
]


def default_prizes() -> List[PrizeOption]:
    """Fresh PrizeOption list for the built-in prizes."""
    return [
        PrizeOption(id=prize_id, name=name, weight=float(weight))
        for prize_id, name, weight in DEFAULT_PRIZES
    ]
