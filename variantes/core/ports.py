# variantes/core/ports.py
"""
Definição das Portas (Interfaces/Protocolos) da Arquitetura Limpa.

O motor de variantes não persiste nada: o item montado é entregue a um
carrinho externo, que DEVE seguir este contrato.
"""

from typing import Protocol
from abc import abstractmethod

from variantes.core.entities import ItemLinha


# ====================================================================
# GATEWAYS (Portas de Serviços Externos)
# ====================================================================

class ICarrinhoGateway(Protocol):
    """Protocolo para o carrinho que recebe os itens montados na página do produto."""

    @abstractmethod
    def adicionar_item_linha(self, item: ItemLinha) -> None: ...
