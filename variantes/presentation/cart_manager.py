# variantes/presentation/cart_manager.py
# Recebe os itens montados pelo motor de variantes e os guarda na sessão do Django.

import logging
from typing import Any, Dict, List

from django.conf import settings
from django.http import HttpRequest

from variantes.core.entities import ItemLinha
from variantes.infrastructure.mappers import ItemLinhaMapper

logger = logging.getLogger(__name__)


class CartManager:
    """
    Implementação do ICarrinhoGateway sobre a sessão do Django.
    Cada item é guardado no formato de cart_items:
    {product_id, variant_id, quantity, unit_price, metadata_json}.
    """

    def __init__(self, request: HttpRequest):
        """Inicializa o CartManager e carrega os itens da sessão."""
        self.request = request
        self.session_key = getattr(settings, 'CARRINHO_SESSION_KEY', 'carrinho_vejoias')
        self.itens: List[Dict[str, Any]] = list(self.request.session.get(self.session_key, []))

    # --- Métodos de Persistência ---

    def _save_carrinho_to_session(self):
        self.request.session[self.session_key] = self.itens
        self.request.session.modified = True

    def clear_carrinho(self):
        """Limpa o carrinho na sessão (usado após o checkout)."""
        if self.session_key in self.request.session:
            del self.request.session[self.session_key]
            self.request.session.modified = True
        self.itens = []

    # --- Métodos de Manipulação ---

    def adicionar_item_linha(self, item: ItemLinha) -> None:
        """
        Adiciona o item ao carrinho. Itens sem detalhes de variantes agrupadas
        somam a quantidade ao item igual (mesmo produto e variante) já existente;
        itens com detalhes sempre entram como uma nova linha.
        """
        linha = ItemLinhaMapper.to_row(item)

        if not linha['metadata_json'].get('variants_detail'):
            existente = next(
                (
                    atual for atual in self.itens
                    if atual['product_id'] == linha['product_id']
                    and atual['variant_id'] == linha['variant_id']
                    and not atual.get('metadata_json', {}).get('variants_detail')
                ),
                None,
            )
            if existente:
                existente['quantity'] += linha['quantity']
                self._save_carrinho_to_session()
                return

        self.itens.append(linha)
        self._save_carrinho_to_session()

    def remove_item(self, indice: int):
        """Remove uma linha do carrinho pela posição."""
        if 0 <= indice < len(self.itens):
            del self.itens[indice]
            self._save_carrinho_to_session()
        else:
            logger.warning("Tentativa de remover linha inexistente do carrinho: %s", indice)

    # --- Métodos de Consulta ---

    def get_itens(self) -> List[Dict[str, Any]]:
        return list(self.itens)

    def get_total_items(self) -> int:
        """Retorna a contagem total de itens (unidades) no carrinho."""
        return sum(linha['quantity'] for linha in self.itens)

    def is_empty(self) -> bool:
        return not self.itens
