# variantes/core/use_cases.py
"""
Implementação dos Casos de Uso (Lógica de Negócio) do motor de variantes.
Esta camada depende apenas das Entidades e Portas (Interfaces) do Core,
garantindo o isolamento da lógica de negócio.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Optional

# Entidades e Exceções
from variantes.core.entities import (
    ROTULO_SEM_GRUPO,
    CatalogoVariantes,
    ConfiguracaoLoja,
    DetalheVariante,
    GrupoAtributo,
    ItemLinha,
    OpcaoVariante,
    ResultadoPreco,
    ValoresBaseProduto,
)
from variantes.core.exceptions import (
    DadosInvalidosError,
    EstoqueInsuficienteError,
    SelecaoIncompletaError,
)
from variantes.core.ports import ICarrinhoGateway
from variantes.core.selecao import EstadoSelecao

logger = logging.getLogger(__name__)

CENTAVOS = Decimal('0.01')


# ====================================================================
# 1. CATÁLOGO DE VARIANTES
# ====================================================================

class MontarCatalogoUseCase:
    """Agrupa as variantes de um produto por grupo de atributo."""

    def executar(self, opcoes: List[OpcaoVariante]) -> CatalogoVariantes:
        opcoes = tuple(opcoes)
        tem_grupos = any(opcao.tem_grupo for opcao in opcoes)

        if not tem_grupos:
            return CatalogoVariantes(tem_grupos=False, grupos=(), opcoes=opcoes)

        # Grupos na ordem em que aparecem pela primeira vez
        por_rotulo = {}
        sem_grupo = []
        for opcao in opcoes:
            if opcao.tem_grupo:
                por_rotulo.setdefault(opcao.grupo, []).append(opcao)
            else:
                sem_grupo.append(opcao)

        grupos = [GrupoAtributo(rotulo=rotulo, opcoes=tuple(itens)) for rotulo, itens in por_rotulo.items()]
        if sem_grupo:
            grupos.append(GrupoAtributo(rotulo=ROTULO_SEM_GRUPO, opcoes=tuple(sem_grupo)))

        return CatalogoVariantes(tem_grupos=True, grupos=tuple(grupos), opcoes=opcoes)


# ====================================================================
# 2. PRECIFICAÇÃO
# ====================================================================

def calcular_desconto_percentual(preco: Decimal, preco_comparacao: Optional[Decimal]) -> int:
    """Percentual de desconto do preço 'de' para o preço 'por', entre 0 e 100."""
    if not preco_comparacao or preco_comparacao <= preco:
        return 0
    percentual = ((preco_comparacao - preco) / preco_comparacao * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
    return max(0, min(100, int(percentual)))


class ResolverPrecoUseCase:
    """
    Calcula preço, desconto e estoque a partir do catálogo, da seleção e dos
    valores base do produto. Nunca levanta erro: com seleção incompleta
    recorre aos valores base.
    """

    def executar(
        self,
        catalogo: CatalogoVariantes,
        selecao: EstadoSelecao,
        base: ValoresBaseProduto,
        configuracao: Optional[ConfiguracaoLoja] = None,
    ) -> ResultadoPreco:
        configuracao = configuracao or ConfiguracaoLoja()

        if catalogo.tem_grupos:
            preco, estoque, em_estoque, estoque_por_grupo = self._resolver_agrupado(catalogo, selecao, base)
        else:
            preco, estoque, em_estoque = self._resolver_plano(catalogo, selecao, base)
            estoque_por_grupo = []

        return ResultadoPreco(
            preco=preco,
            preco_comparacao=base.preco_comparacao,
            desconto_percentual=calcular_desconto_percentual(preco, base.preco_comparacao),
            estoque=estoque,
            em_estoque=em_estoque,
            estoque_por_grupo=estoque_por_grupo,
            preco_pix=self._preco_pix(preco, configuracao),
            max_parcelas=self._max_parcelas(configuracao),
            valor_parcela=self._valor_parcela(preco, configuracao),
            ultimas_unidades=(
                configuracao.aviso_estoque_habilitado
                and em_estoque
                and estoque <= configuracao.limite_aviso_estoque
            ),
        )

    def _resolver_agrupado(self, catalogo, selecao, base):
        estoque_por_grupo = [0] * len(catalogo.grupos)
        selecionadas = []
        for indice in sorted(selecao.atributos):
            if indice >= len(catalogo.grupos):
                continue
            opcao = catalogo.grupos[indice].buscar_opcao(selecao.atributos[indice])
            if opcao is None:
                continue
            estoque_por_grupo[indice] = opcao.estoque
            selecionadas.append(opcao)

        if not selecionadas:
            return base.preco, base.estoque, base.estoque > 0, estoque_por_grupo

        # Soma o preço absoluto de cada opção escolhida; soma zero volta ao preço base.
        soma = sum((opcao.preco or Decimal('0') for opcao in selecionadas), Decimal('0'))
        preco = soma or base.preco
        estoque = min(opcao.estoque for opcao in selecionadas)
        em_estoque = all(opcao.estoque > 0 for opcao in selecionadas)
        return preco, estoque, em_estoque, estoque_por_grupo

    def _resolver_plano(self, catalogo, selecao, base):
        variante = selecao.variante_plana(catalogo)
        if variante is None:
            return base.preco, base.estoque, base.estoque > 0

        preco = variante.preco if variante.preco is not None else base.preco
        return preco, variante.estoque, variante.estoque > 0

    @staticmethod
    def _preco_pix(preco: Decimal, configuracao: ConfiguracaoLoja) -> Optional[Decimal]:
        percentual = min(configuracao.pix_desconto_percentual, 100)
        if not configuracao.pix_habilitado or percentual <= 0:
            return None
        fator = Decimal('1') - Decimal(percentual) / Decimal('100')
        return (preco * fator).quantize(CENTAVOS, rounding=ROUND_HALF_UP)

    @staticmethod
    def _max_parcelas(configuracao: ConfiguracaoLoja) -> Optional[int]:
        if configuracao.parcelamento_habilitado and configuracao.max_parcelas > 1:
            return configuracao.max_parcelas
        return None

    def _valor_parcela(self, preco: Decimal, configuracao: ConfiguracaoLoja) -> Optional[Decimal]:
        parcelas = self._max_parcelas(configuracao)
        if parcelas is None:
            return None
        return (preco / parcelas).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


# ====================================================================
# 3. ITEM DO CARRINHO
# ====================================================================

class MontarItemLinhaUseCase:
    """Converte uma seleção completa em um ItemLinha imutável."""

    def executar(
        self,
        catalogo: CatalogoVariantes,
        selecao: EstadoSelecao,
        resultado_preco: ResultadoPreco,
        quantidade: int,
        produto_id: str,
    ) -> ItemLinha:
        if quantidade < 1:
            raise DadosInvalidosError("A quantidade deve ser de pelo menos 1 unidade.")

        # Completude sempre contra o catálogo recebido, mesmo que a seleção
        # ainda esteja associada a outro.
        if catalogo.tem_grupos and not selecao.esta_completa(catalogo):
            raise SelecaoIncompletaError(selecao.grupos_pendentes(catalogo))

        detalhes = None
        if catalogo.tem_grupos:
            selecionadas = selecao.opcoes_selecionadas(catalogo)
            # Só cabe um id de variante por item: fica o do último grupo resolvido.
            variante_id = selecionadas[-1][1].id if selecionadas else None
            if selecionadas:
                detalhes = tuple(
                    DetalheVariante(
                        grupo=grupo.rotulo,
                        nome=opcao.nome,
                        preco=opcao.preco,
                        variante_id=opcao.id,
                        cor_hex=opcao.cor_hex,
                    )
                    for grupo, opcao in selecionadas
                )
        else:
            variante = selecao.variante_plana(catalogo)
            variante_id = variante.id if variante else None

        return ItemLinha(
            produto_id=produto_id,
            variante_id=variante_id,
            quantidade=quantidade,
            preco_unitario=resultado_preco.preco,
            detalhes_variantes=detalhes,
        )


class AdicionarAoCarrinhoUseCase:
    """
    Caso de Uso do botão 'Adicionar ao carrinho' / 'Comprar agora'.
    Recalcula o preço a partir da seleção atual, monta o item e o entrega ao carrinho.
    """
    def __init__(
        self,
        carrinho_gateway: ICarrinhoGateway,
        configuracao: Optional[ConfiguracaoLoja] = None,
        resolver_preco: Optional[ResolverPrecoUseCase] = None,
        montar_item: Optional[MontarItemLinhaUseCase] = None,
    ):
        self.carrinho_gateway = carrinho_gateway
        self.configuracao = configuracao
        self.resolver_preco = resolver_preco or ResolverPrecoUseCase()
        self.montar_item = montar_item or MontarItemLinhaUseCase()

    def executar(self, selecao: EstadoSelecao, base: ValoresBaseProduto, quantidade: int = 1) -> ItemLinha:
        catalogo = selecao.catalogo

        # Nunca reaproveita um preço calculado antes da última mudança na seleção.
        resultado = self.resolver_preco.executar(catalogo, selecao, base, self.configuracao)

        item = self.montar_item.executar(catalogo, selecao, resultado, quantidade, base.produto_id)

        if not resultado.em_estoque:
            raise EstoqueInsuficienteError(
                produto_id=base.produto_id,
                estoque_atual=resultado.estoque,
                variante_id=item.variante_id,
            )

        self.carrinho_gateway.adicionar_item_linha(item)
        logger.info(
            "Item adicionado ao carrinho: produto=%s variante=%s quantidade=%s preco=%s",
            item.produto_id, item.variante_id, item.quantidade, item.preco_unitario,
        )
        return item
