"""
Mapeadores (Mappers) para converter entre:
1. Linhas do banco hospedado (dicts com os nomes de coluna em inglês)
2. Entidades de Domínio (variantes.core.entities)
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional

from variantes.core.entities import (
    ConfiguracaoLoja,
    ItemLinha,
    OpcaoVariante,
    ValoresBaseProduto,
)
from variantes.core.exceptions import DadosInvalidosError


def _decimal(valor: Any, campo: str) -> Optional[Decimal]:
    """Converte o valor para Decimal, preservando None (ausência de preço)."""
    if valor is None or valor == '':
        return None
    try:
        return Decimal(str(valor))
    except (InvalidOperation, ValueError):
        raise DadosInvalidosError(f"Valor inválido para '{campo}': {valor!r}.")


def _inteiro(valor: Any, campo: str, padrao: int = 0) -> int:
    if valor is None or valor == '':
        return padrao
    try:
        return int(valor)
    except (TypeError, ValueError):
        raise DadosInvalidosError(f"Valor inválido para '{campo}': {valor!r}.")


def _estoque(valor: Any) -> int:
    estoque = _inteiro(valor, 'stock')
    if estoque < 0:
        raise DadosInvalidosError("O estoque não pode ser negativo.")
    return estoque


def _decimal_para_json(valor: Optional[Decimal]) -> Optional[str]:
    """Preço em texto com centavos, como o DRF serializa Decimal."""
    if valor is None:
        return None
    return str(valor.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP))


class BaseMapper:

    @staticmethod
    def campo_obrigatorio(linha: Mapping[str, Any], campo: str) -> Any:
        if linha.get(campo) in (None, ''):
            raise DadosInvalidosError(f"O campo '{campo}' é obrigatório.")
        return linha[campo]


# ====================================================================
# MAPPERS DO CATÁLOGO
# ====================================================================

class OpcaoVarianteMapper(BaseMapper):
    """Mapeador para as linhas de product_variants."""

    @classmethod
    def to_entity(cls, linha: Mapping[str, Any]) -> OpcaoVariante:
        """Converte {id, name, price, stock, attribute_group, color_hex} em OpcaoVariante."""
        return OpcaoVariante(
            id=str(cls.campo_obrigatorio(linha, 'id')),
            nome=str(cls.campo_obrigatorio(linha, 'name')),
            estoque=_estoque(linha.get('stock')),
            preco=_decimal(linha.get('price'), 'price'),
            grupo=(linha.get('attribute_group') or '').strip() or None,
            cor_hex=linha.get('color_hex') or None,
        )

    @classmethod
    def to_entities(cls, linhas: Optional[List[Mapping[str, Any]]]) -> List[OpcaoVariante]:
        return [cls.to_entity(linha) for linha in linhas or []]


class ValoresBaseMapper(BaseMapper):
    """Mapeador para a linha do produto (preço, preço 'de' e estoque)."""

    @classmethod
    def to_entity(cls, linha: Mapping[str, Any]) -> ValoresBaseProduto:
        return ValoresBaseProduto(
            produto_id=str(cls.campo_obrigatorio(linha, 'id')),
            preco=_decimal(cls.campo_obrigatorio(linha, 'price'), 'price'),
            estoque=_estoque(linha.get('stock')),
            preco_comparacao=_decimal(linha.get('compare_at_price'), 'compare_at_price'),
        )


# ====================================================================
# MAPPER DAS CONFIGURAÇÕES DA LOJA
# ====================================================================

class ConfiguracaoLojaMapper:
    """
    Converte as configurações da loja (chave/valor em texto, como estão salvas
    em store_settings) na entidade ConfiguracaoLoja.
    """

    @staticmethod
    def _habilitado(valor: Any) -> bool:
        if isinstance(valor, bool):
            return valor
        return str(valor).strip().lower() in ('true', '1', 'on', 'sim')

    @classmethod
    def to_entity(cls, ajustes: Mapping[str, Any], padrao: Optional[ConfiguracaoLoja] = None) -> ConfiguracaoLoja:
        padrao = padrao or ConfiguracaoLoja(pix_desconto_percentual=5, max_parcelas=12, limite_aviso_estoque=3)

        def ler(chave, atual):
            return ajustes[chave] if ajustes.get(chave) not in (None, '') else atual

        return ConfiguracaoLoja(
            pix_habilitado=cls._habilitado(ler('pix_enabled', padrao.pix_habilitado)),
            pix_desconto_percentual=_inteiro(
                ler('pix_discount_percent', padrao.pix_desconto_percentual), 'pix_discount_percent'),
            parcelamento_habilitado=cls._habilitado(ler('installments_enabled', padrao.parcelamento_habilitado)),
            max_parcelas=_inteiro(ler('max_installments', padrao.max_parcelas), 'max_installments'),
            aviso_estoque_habilitado=cls._habilitado(ler('stock_warning_enabled', padrao.aviso_estoque_habilitado)),
            limite_aviso_estoque=_inteiro(
                ler('stock_warning_threshold', padrao.limite_aviso_estoque), 'stock_warning_threshold'),
        )

    @staticmethod
    def from_settings(ajustes: Mapping[str, Any]) -> ConfiguracaoLoja:
        """Converte o dict VARIANTES_LOJA das settings do Django."""
        return ConfiguracaoLoja(
            pix_habilitado=bool(ajustes.get('PIX_HABILITADO', False)),
            pix_desconto_percentual=int(ajustes.get('PIX_DESCONTO_PERCENTUAL', 0)),
            parcelamento_habilitado=bool(ajustes.get('PARCELAMENTO_HABILITADO', False)),
            max_parcelas=int(ajustes.get('MAX_PARCELAS', 1)),
            aviso_estoque_habilitado=bool(ajustes.get('AVISO_ESTOQUE_HABILITADO', False)),
            limite_aviso_estoque=int(ajustes.get('LIMITE_AVISO_ESTOQUE', 0)),
        )


# ====================================================================
# MAPPER DO ITEM DO CARRINHO
# ====================================================================

class ItemLinhaMapper:
    """Converte o ItemLinha na linha de cart_items (metadata_json com variants_detail)."""

    @staticmethod
    def to_row(item: ItemLinha) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {}
        if item.detalhes_variantes:
            metadata['variants_detail'] = [
                {
                    'group': detalhe.grupo,
                    'name': detalhe.nome,
                    'price': _decimal_para_json(detalhe.preco),
                    'variant_id': detalhe.variante_id,
                    'color_hex': detalhe.cor_hex,
                }
                for detalhe in item.detalhes_variantes
            ]

        return {
            'product_id': item.produto_id,
            'variant_id': item.variante_id,
            'quantity': item.quantidade,
            'unit_price': _decimal_para_json(item.preco_unitario),
            'metadata_json': metadata,
        }
