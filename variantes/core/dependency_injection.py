# variantes/core/dependency_injection.py
"""
Módulo de Injeção de Dependência (DI).
Responsável por instanciar os Use Cases com suas dependências concretas
(configuração da loja lida das settings do Django e o carrinho da sessão).
"""
from typing import Any, Mapping, Optional

from django.conf import settings

from variantes.core.entities import ConfiguracaoLoja
from variantes.core.ports import ICarrinhoGateway
from variantes.infrastructure.mappers import ConfiguracaoLojaMapper
from .use_cases import (
    MontarCatalogoUseCase,
    ResolverPrecoUseCase,
    MontarItemLinhaUseCase,
    AdicionarAoCarrinhoUseCase,
)


# ====================================================================
# Configuração da Loja
# ====================================================================

def get_configuracao_loja(ajustes_loja: Optional[Mapping[str, Any]] = None) -> ConfiguracaoLoja:
    """
    Configuração padrão das settings, sobrescrita pelos ajustes salvos
    pela loja (store_settings), quando fornecidos.
    """
    padrao = ConfiguracaoLojaMapper.from_settings(getattr(settings, 'VARIANTES_LOJA', {}))
    if not ajustes_loja:
        return padrao
    return ConfiguracaoLojaMapper.to_entity(ajustes_loja, padrao=padrao)


# ====================================================================
# Use Cases do Motor de Variantes
# ====================================================================

def get_montar_catalogo_use_case() -> MontarCatalogoUseCase:
    return MontarCatalogoUseCase()

def get_resolver_preco_use_case() -> ResolverPrecoUseCase:
    return ResolverPrecoUseCase()

def get_montar_item_linha_use_case() -> MontarItemLinhaUseCase:
    return MontarItemLinhaUseCase()

def get_adicionar_ao_carrinho_use_case(
    carrinho_gateway: ICarrinhoGateway,
    ajustes_loja: Optional[Mapping[str, Any]] = None,
) -> AdicionarAoCarrinhoUseCase:
    return AdicionarAoCarrinhoUseCase(
        carrinho_gateway=carrinho_gateway,
        configuracao=get_configuracao_loja(ajustes_loja),
        resolver_preco=get_resolver_preco_use_case(),
        montar_item=get_montar_item_linha_use_case(),
    )
