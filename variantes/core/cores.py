"""
Cores conhecidas de metais/acabamentos, usadas quando a variante
não tem uma cor cadastrada.
"""
from typing import Optional

CORES_METAIS = {
    "dourado": "#D4A017",
    "ouro": "#D4A017",
    "ouro 18k": "#D4A017",
    "ouro amarelo": "#D4A017",
    "prata": "#C0C0C0",
    "ródio branco": "#E8E8E8",
    "ródio negro": "#2C2C2C",
    "rosé": "#B76E79",
    "rosé gold": "#B76E79",
    "grafite": "#5A5A5A",
    "negro": "#1A1A1A",
    "bronze": "#CD7F32",
    "cobre": "#B87333",
}


def cor_do_metal(nome: str) -> Optional[str]:
    """Retorna o hex da cor para o nome do metal, ou None se não for conhecido."""
    if not nome:
        return None
    return CORES_METAIS.get(nome.strip().lower())
