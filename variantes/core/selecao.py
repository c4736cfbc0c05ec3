# variantes/core/selecao.py
"""
Estado da seleção do cliente na página do produto.

Produtos com grupos guardam, por índice de grupo, o NOME da opção escolhida.
Produtos sem grupos guardam apenas o índice da variante escolhida na lista plana.
"""
import logging
from typing import Dict, List, Optional, Tuple

from variantes.core.entities import CatalogoVariantes, GrupoAtributo, OpcaoVariante

logger = logging.getLogger(__name__)


class EstadoSelecao:
    """Seleção atual: no máximo uma opção por grupo (semântica de 'toggle')."""

    def __init__(self, catalogo: CatalogoVariantes):
        self.catalogo = catalogo
        self._atributos: Dict[int, str] = {}
        self._indice_variante: Optional[int] = None

    # --- Consulta ---

    @property
    def atributos(self) -> Dict[int, str]:
        """Cópia do mapa {índice do grupo: nome da opção}."""
        return dict(self._atributos)

    @property
    def indice_variante(self) -> Optional[int]:
        return self._indice_variante

    def selecionado(self, indice_grupo: int) -> Optional[str]:
        return self._atributos.get(indice_grupo)

    def _catalogo(self, catalogo: Optional[CatalogoVariantes]) -> CatalogoVariantes:
        return self.catalogo if catalogo is None else catalogo

    def opcoes_selecionadas(
        self, catalogo: Optional[CatalogoVariantes] = None
    ) -> List[Tuple[GrupoAtributo, OpcaoVariante]]:
        """
        Pares (grupo, opção) resolvidos, em ordem crescente de índice do grupo.
        Com 'catalogo' informado, resolve contra ele em vez do catálogo associado.
        """
        catalogo = self._catalogo(catalogo)
        resolvidas = []
        for indice in sorted(self._atributos):
            if indice >= len(catalogo.grupos):
                continue
            grupo = catalogo.grupos[indice]
            opcao = grupo.buscar_opcao(self._atributos[indice])
            if opcao is not None:
                resolvidas.append((grupo, opcao))
        return resolvidas

    def variante_plana(self, catalogo: Optional[CatalogoVariantes] = None) -> Optional[OpcaoVariante]:
        """Variante escolhida em um produto sem grupos."""
        catalogo = self._catalogo(catalogo)
        if catalogo.tem_grupos or self._indice_variante is None:
            return None
        if self._indice_variante >= len(catalogo.opcoes):
            return None
        return catalogo.opcoes[self._indice_variante]

    def esta_completa(self, catalogo: Optional[CatalogoVariantes] = None) -> bool:
        catalogo = self._catalogo(catalogo)
        # Sem grupos a escolha de variante é opcional.
        if not catalogo.tem_grupos:
            return True
        return not self.grupos_pendentes(catalogo)

    def grupos_pendentes(self, catalogo: Optional[CatalogoVariantes] = None) -> List[str]:
        """Rótulos dos grupos que ainda não têm uma opção válida escolhida."""
        catalogo = self._catalogo(catalogo)
        return [
            grupo.rotulo
            for indice, grupo in enumerate(catalogo.grupos)
            if grupo.buscar_opcao(self._atributos.get(indice)) is None
        ]

    # --- Mutação ---

    def alternar(self, indice_grupo: int, nome_opcao: str) -> bool:
        """
        Seleciona a opção no grupo ou, se ela já estiver escolhida, limpa o grupo.
        Retorna False (sem alterar nada) para grupo/opção inexistente ou opção sem estoque.
        """
        if not 0 <= indice_grupo < len(self.catalogo.grupos):
            logger.debug("Grupo %s inexistente; seleção ignorada.", indice_grupo)
            return False

        grupo = self.catalogo.grupos[indice_grupo]
        opcao = grupo.buscar_opcao(nome_opcao)
        if opcao is None:
            logger.debug("Opção '%s' não existe no grupo '%s'.", nome_opcao, grupo.rotulo)
            return False
        if not opcao.disponivel:
            logger.debug("Opção '%s' do grupo '%s' sem estoque; seleção recusada.", nome_opcao, grupo.rotulo)
            return False

        if self._atributos.get(indice_grupo) == nome_opcao:
            del self._atributos[indice_grupo]
        else:
            self._atributos[indice_grupo] = nome_opcao
        return True

    def alternar_variante(self, indice: int) -> bool:
        """Seleciona/limpa a variante de um produto sem grupos."""
        if self.catalogo.tem_grupos or not 0 <= indice < len(self.catalogo.opcoes):
            return False

        self._indice_variante = None if self._indice_variante == indice else indice
        return True

    def redefinir(self, catalogo: CatalogoVariantes):
        """
        Associa a seleção a um catálogo reconstruído, descartando entradas
        que não existem mais nele.
        """
        self.catalogo = catalogo

        if not catalogo.tem_grupos:
            self._atributos.clear()
        else:
            self._atributos = {
                indice: nome
                for indice, nome in self._atributos.items()
                if indice < len(catalogo.grupos) and catalogo.grupos[indice].buscar_opcao(nome)
            }

        if catalogo.tem_grupos or (
            self._indice_variante is not None and self._indice_variante >= len(catalogo.opcoes)
        ):
            self._indice_variante = None
